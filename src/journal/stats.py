"""
ダッシュボード統計の集計

エントリー一覧と「今日」の日付から、総数・連続記録日数・カテゴリ数・
月別件数・直近7日間の推移・最近のエントリーを計算する純粋関数群。
日付はすべてUTC基準。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .models import JournalEntry

EXCERPT_LENGTH = 120
RECENT_LIMIT = 3


@dataclass(slots=True)
class ActivityPoint:
    """日別の記録件数（チャート1点分）"""

    name: str  # 曜日の略称 (Mon..Sun)
    day: date
    entries: int


@dataclass(slots=True)
class RecentEntry:
    id: str
    title: str
    excerpt: str
    category: Optional[str]
    created_on: date


@dataclass(slots=True)
class DashboardStats:
    total_entries: int
    entries_this_week: int
    current_streak: int
    category_count: int
    entries_this_month: int
    entries_last_month: int
    weekly_activity: List[ActivityPoint] = field(default_factory=list)
    recent_entries: List[RecentEntry] = field(default_factory=list)


def entry_day(entry: JournalEntry) -> date:
    return datetime.fromisoformat(entry.created_at).date()


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    text = " ".join(content.split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def current_streak(days: set[date], today: date) -> int:
    """今日（今日が未記入なら昨日）から遡って連続で記録がある日数"""
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def _previous_month(today: date) -> tuple[int, int]:
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def compute_dashboard(entries: Sequence[JournalEntry], today: date) -> DashboardStats:
    """
    ダッシュボード統計を計算

    Args:
        entries: オーナーのエントリー（新しい順）
        today: 基準日

    Returns:
        DashboardStats
    """
    per_day: Dict[date, int] = {}
    for entry in entries:
        day = entry_day(entry)
        per_day[day] = per_day.get(day, 0) + 1

    week_start = today - timedelta(days=6)
    weekly_activity = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        weekly_activity.append(
            ActivityPoint(name=day.strftime("%a"), day=day, entries=per_day.get(day, 0))
        )

    last_year, last_month = _previous_month(today)
    this_month = sum(
        count for day, count in per_day.items()
        if day.year == today.year and day.month == today.month
    )
    previous_month = sum(
        count for day, count in per_day.items()
        if day.year == last_year and day.month == last_month
    )

    categories = {
        entry.category.strip().lower() for entry in entries if entry.category and entry.category.strip()
    }

    recent = [
        RecentEntry(
            id=entry.id,
            title=entry.title,
            excerpt=make_excerpt(entry.content),
            category=entry.category,
            created_on=entry_day(entry),
        )
        for entry in entries[:RECENT_LIMIT]
    ]

    return DashboardStats(
        total_entries=len(entries),
        entries_this_week=sum(point.entries for point in weekly_activity),
        current_streak=current_streak(set(per_day), today),
        category_count=len(categories),
        entries_this_month=this_month,
        entries_last_month=previous_month,
        weekly_activity=weekly_activity,
        recent_entries=recent,
    )
