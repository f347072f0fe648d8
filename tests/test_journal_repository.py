"""Journal Repository Unit Tests

JournalRepositoryの単体テスト
"""

from itertools import count

import pytest

from src.devjournal.exceptions import InvalidRequestError, PersistenceError
from src.journal.models import EntryDraft
from src.journal.repository import JournalRepository


@pytest.fixture
def repo(tmp_path):
    """JournalRepositoryのインスタンス"""
    return JournalRepository(db_path=tmp_path / "journal.db")


@pytest.fixture
def ticking_clock(monkeypatch):
    """呼び出すたびに1日進むタイムスタンプ"""
    days = count(1)
    monkeypatch.setattr(
        JournalRepository,
        "_now",
        staticmethod(lambda: f"2025-01-{next(days):02d}T09:00:00+00:00"),
    )


def test_journal_repository_crud_cycle(repo):
    created = repo.create(
        "user-1",
        title="Implemented Redux Toolkit",
        content="Migrated state management from Context API.",
        category="Learning",
        tags="React, Redux ,TypeScript",
    )
    assert created.owner == "user-1"
    assert created.tags == ["React", "Redux", "TypeScript"]
    assert created.created_at == created.updated_at

    assert repo.get("user-1", created.id) == created
    assert repo.count("user-1") == 1

    updated = repo.update(
        "user-1",
        created.id,
        content="Migrated state management and added DevTools.",
        category=None,
        tags=["Redux"],
    )
    assert updated is not None
    assert updated.title == "Implemented Redux Toolkit"
    assert updated.category is None
    assert updated.tags == ["Redux"]
    assert updated.created_at == created.created_at

    assert repo.delete("user-1", created.id) is True
    assert repo.list("user-1") == []


def test_update_refreshes_updated_at_only(repo, ticking_clock):
    created = repo.create("user-1", "Title", "Content")

    updated = repo.update("user-1", created.id, title="New title")

    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_list_is_newest_first(repo, ticking_clock):
    first = repo.create("user-1", "A", "first")
    second = repo.create("user-1", "B", "second")
    third = repo.create("user-1", "C", "third")

    assert [e.id for e in repo.list("user-1")] == [third.id, second.id, first.id]


def test_entries_are_scoped_by_owner(repo):
    mine = repo.create("user-1", "Mine", "content")
    repo.create("user-2", "Theirs", "content")

    assert [e.title for e in repo.list("user-1")] == ["Mine"]
    assert repo.get("user-2", mine.id) is None
    assert repo.update("user-2", mine.id, title="Hijacked") is None
    assert repo.delete("user-2", mine.id) is False
    assert repo.get("user-1", mine.id).title == "Mine"


def test_list_filters(repo):
    repo.create("user-1", "Code Review Insights", "Learned React Query", "Team", ["Code Review"])
    repo.create("user-1", "Debugging", "Race condition in WebSocket", "Challenge", ["WebSocket", "React"])
    repo.create("user-1", "Perf win", "Lazy loading", "Achievement", ["Performance"])

    assert [e.title for e in repo.list("user-1", query="react query")] == ["Code Review Insights"]
    assert [e.title for e in repo.list("user-1", category="challenge")] == ["Debugging"]
    assert [e.title for e in repo.list("user-1", tag="websocket")] == ["Debugging"]
    assert len(repo.list("user-1", limit=2)) == 2


@pytest.mark.parametrize("limit", [0, -1])
def test_list_rejects_non_positive_limit(repo, limit):
    repo.create("user-1", "Only", "entry")

    with pytest.raises(InvalidRequestError):
        repo.list("user-1", limit=limit)


def test_create_rejects_empty_title(repo):
    with pytest.raises(InvalidRequestError):
        repo.create("user-1", "   ", "content")


def test_update_rejects_empty_content(repo):
    created = repo.create("user-1", "Title", "Content")

    with pytest.raises(InvalidRequestError):
        repo.update("user-1", created.id, content="")


def test_bulk_create_inserts_all_rows(repo):
    drafts = [EntryDraft(title=f"Role {i}", content=f"Did things {i}") for i in range(5)]

    created = repo.bulk_create("user-1", drafts)

    assert [e.title for e in created] == [f"Role {i}" for i in range(5)]
    assert repo.count("user-1") == 5


def test_bulk_create_is_all_or_nothing(repo):
    """5件中3件目の挿入が失敗したら1件も残らない"""
    drafts = [EntryDraft(title=f"Role {i}", content=f"Did things {i}") for i in range(5)]
    # 検証後に値を壊し、DBのCHECK制約で3件目を失敗させる
    drafts[2].title = "   "

    with pytest.raises(PersistenceError):
        repo.bulk_create("user-1", drafts)

    assert repo.count("user-1") == 0
    assert repo.list("user-1") == []
