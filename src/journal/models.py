from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


def parse_tags(raw: Union[str, Iterable[Any], None]) -> List[str]:
    """カンマ区切り文字列またはリストからタグ配列を作る（前後空白除去・空要素破棄）"""
    if raw is None:
        return []
    tokens = raw.split(",") if isinstance(raw, str) else raw
    tags: List[str] = []
    for token in tokens:
        if token is None:
            continue
        text = str(token).strip()
        if text:
            tags.append(text)
    return tags


def normalize_category(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


@dataclass(slots=True)
class JournalEntry:
    """永続化済みジャーナルエントリーの表現。"""

    id: str
    owner: str
    title: str
    content: str
    category: Optional[str]
    tags: List[str]
    created_at: str  # ISO8601 (UTC)
    updated_at: str  # ISO8601 (UTC)


@dataclass(slots=True)
class EntryDraft:
    """未保存のエントリー。フォーム入力や履歴書インポートの候補。"""

    title: str
    content: str
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.title = (self.title or "").strip()
        self.content = (self.content or "").strip()
        self.category = normalize_category(self.category)
        self.tags = parse_tags(self.tags)
        if not self.title:
            raise ValueError("title must not be empty")
        if not self.content:
            raise ValueError("content must not be empty")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EntryDraft":
        """信頼できない辞書（LLM出力など）からドラフトを作る

        Raises:
            ValueError: 型や必須項目が不正な場合
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"entry must be an object, got {type(data).__name__}")

        title = data.get("title")
        content = data.get("content")
        category = data.get("category")
        tags = data.get("tags", [])
        if not isinstance(title, str) or not isinstance(content, str):
            raise ValueError("title and content must be strings")
        if category is not None and not isinstance(category, str):
            raise ValueError("category must be a string")
        if tags is not None and not isinstance(tags, (str, list)):
            raise ValueError("tags must be a list of strings")
        return cls(title=title, content=content, category=category, tags=tags or [])


class GeneratedSummary(BaseModel):
    """AIサマリーの構造化出力（永続化しない）"""

    model_config = ConfigDict(strict=True)

    overview: str
    insights: List[str]
    achievements: List[str]
    technologies: List[str]
    recommendations: List[str]
