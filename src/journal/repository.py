from __future__ import annotations

import json
import logging
import os
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from src.devjournal.exceptions import InvalidRequestError, PersistenceError

from .models import EntryDraft, JournalEntry, normalize_category, parse_tags

UNSET = object()

logger = logging.getLogger(__name__)


class JournalRepository:
    """SQLiteベースのジャーナルエントリー管理。全操作がオーナー単位でスコープされる。"""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "devjournal.db"
        env_path = os.getenv("DEVJOURNAL_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS journal_entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL CHECK (length(trim(title)) > 0),
                    content TEXT NOT NULL CHECK (length(trim(content)) > 0),
                    category TEXT,
                    tags_json TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_user ON journal_entries(user_id)"
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_created ON journal_entries(user_id, created_at DESC)"
            )
            conn.commit()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
        return JournalEntry(
            id=row["id"],
            owner=row["user_id"],
            title=row["title"],
            content=row["content"],
            category=row["category"],
            tags=json.loads(row["tags_json"] or "[]"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _draft_params(owner: str, draft: EntryDraft, now: str) -> tuple:
        return (
            str(uuid.uuid4()),
            owner,
            draft.title,
            draft.content,
            draft.category,
            json.dumps(draft.tags, ensure_ascii=False),
            now,
            now,
        )

    def list(
        self,
        owner: str,
        query: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[JournalEntry]:
        """オーナーのエントリーを新しい順に返す"""
        if limit is not None and limit < 1:
            raise InvalidRequestError("limit must be a positive integer")
        clauses = ["user_id = ?"]
        params: list[Any] = [owner]
        if query:
            clauses.append("(title LIKE ? COLLATE NOCASE OR content LIKE ? COLLATE NOCASE)")
            pattern = f"%{query}%"
            params.extend([pattern, pattern])
        if category:
            clauses.append("category = ? COLLATE NOCASE")
            params.append(category)

        sql = (
            f"SELECT * FROM journal_entries WHERE {' AND '.join(clauses)} "
            "ORDER BY created_at DESC, rowid DESC"
        )
        try:
            with self._connect() as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Failed to list entries for {owner}: {e}")
            raise PersistenceError(f"Failed to fetch entries: {e}") from e

        entries = [self._row_to_entry(row) for row in rows]
        if tag:
            wanted = tag.strip().lower()
            entries = [e for e in entries if any(t.lower() == wanted for t in e.tags)]
        if limit is not None:
            entries = entries[:limit]
        return entries

    def count(self, owner: str) -> int:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT COUNT(*) AS n FROM journal_entries WHERE user_id = ?", (owner,)
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to count entries: {e}") from e
        return row["n"]

    def get(self, owner: str, entry_id: str) -> Optional[JournalEntry]:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT * FROM journal_entries WHERE id = ? AND user_id = ?",
                    (entry_id, owner),
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to fetch entry: {e}") from e
        return self._row_to_entry(row) if row else None

    def create(
        self,
        owner: str,
        title: str,
        content: str,
        category: Optional[str] = None,
        tags: Iterable[str] | str = (),
    ) -> JournalEntry:
        try:
            draft = EntryDraft(title=title, content=content, category=category, tags=tags)
        except ValueError as e:
            raise InvalidRequestError(str(e)) from e
        return self.bulk_create(owner, [draft])[0]

    def bulk_create(self, owner: str, drafts: Sequence[EntryDraft]) -> list[JournalEntry]:
        """複数エントリーを1トランザクションで挿入する。1件でも失敗すれば全件ロールバック。"""
        if not owner:
            raise InvalidRequestError("owner is required")
        if not drafts:
            return []

        now = self._now()
        params = [self._draft_params(owner, draft, now) for draft in drafts]
        conn = self._connect()
        try:
            with conn:
                conn.executemany(
                    """
                    INSERT INTO journal_entries (id, user_id, title, content, category, tags_json, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    params,
                )
            ids = [p[0] for p in params]
            placeholders = ", ".join("?" for _ in ids)
            rows = conn.execute(
                f"SELECT * FROM journal_entries WHERE id IN ({placeholders})", ids
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error inserting entries for {owner}: {e}")
            raise PersistenceError(f"Failed to insert entries: {e}") from e
        finally:
            conn.close()

        by_id = {row["id"]: self._row_to_entry(row) for row in rows}
        return [by_id[entry_id] for entry_id in ids]

    def update(
        self,
        owner: str,
        entry_id: str,
        *,
        title: Optional[str] = None,
        content: Optional[str] = None,
        category: Any = UNSET,
        tags: Any = None,
    ) -> Optional[JournalEntry]:
        fields: list[str] = []
        params: list[object] = []

        if title is not None:
            if not title.strip():
                raise InvalidRequestError("title must not be empty")
            fields.append("title = ?")
            params.append(title.strip())
        if content is not None:
            if not content.strip():
                raise InvalidRequestError("content must not be empty")
            fields.append("content = ?")
            params.append(content.strip())
        if category is not UNSET:
            fields.append("category = ?")
            params.append(normalize_category(category))
        if tags is not None:
            fields.append("tags_json = ?")
            params.append(json.dumps(parse_tags(tags), ensure_ascii=False))

        if not fields:
            return self.get(owner, entry_id)

        fields.append("updated_at = ?")
        params.append(self._now())
        params.extend([entry_id, owner])

        try:
            with self._connect() as conn:
                conn.execute(
                    f"UPDATE journal_entries SET {', '.join(fields)} WHERE id = ? AND user_id = ?",
                    params,
                )
                conn.commit()
                row = conn.execute(
                    "SELECT * FROM journal_entries WHERE id = ? AND user_id = ?",
                    (entry_id, owner),
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to update entry: {e}") from e

        return self._row_to_entry(row) if row else None

    def delete(self, owner: str, entry_id: str) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM journal_entries WHERE id = ? AND user_id = ?",
                    (entry_id, owner),
                )
                conn.commit()
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to delete entry: {e}") from e
