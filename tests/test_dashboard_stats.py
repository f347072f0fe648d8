"""
ダッシュボード統計のテスト
"""

from datetime import date

from src.journal.models import JournalEntry
from src.journal.stats import compute_dashboard, current_streak, make_excerpt


def make_entry(entry_id, day, category=None, content="Worked on the thing"):
    timestamp = f"{day.isoformat()}T12:00:00+00:00"
    return JournalEntry(
        id=entry_id,
        owner="user-1",
        title=f"Entry {entry_id}",
        content=content,
        category=category,
        tags=[],
        created_at=timestamp,
        updated_at=timestamp,
    )


TODAY = date(2025, 3, 5)  # Wednesday


def test_empty_dashboard():
    stats = compute_dashboard([], TODAY)

    assert stats.total_entries == 0
    assert stats.current_streak == 0
    assert stats.category_count == 0
    assert [p.entries for p in stats.weekly_activity] == [0] * 7
    assert stats.recent_entries == []


def test_dashboard_counts():
    entries = [
        make_entry("6", date(2025, 3, 5), "Learning"),
        make_entry("5", date(2025, 3, 5), "learning"),
        make_entry("4", date(2025, 3, 4), "Achievement"),
        make_entry("3", date(2025, 3, 3), None),
        make_entry("2", date(2025, 2, 27), "Team"),
        make_entry("1", date(2025, 1, 10), "Challenge"),
    ]

    stats = compute_dashboard(entries, TODAY)

    assert stats.total_entries == 6
    assert stats.entries_this_week == 5
    assert stats.current_streak == 3
    assert stats.category_count == 4
    assert stats.entries_this_month == 4
    assert stats.entries_last_month == 1
    assert [p.name for p in stats.weekly_activity] == ["Thu", "Fri", "Sat", "Sun", "Mon", "Tue", "Wed"]
    assert [p.entries for p in stats.weekly_activity] == [1, 0, 0, 0, 1, 1, 2]
    assert [r.id for r in stats.recent_entries] == ["6", "5", "4"]


def test_last_month_wraps_year():
    entries = [make_entry("1", date(2024, 12, 31)), make_entry("2", date(2025, 1, 2))]

    stats = compute_dashboard(entries, date(2025, 1, 3))

    assert stats.entries_this_month == 1
    assert stats.entries_last_month == 1


def test_streak_survives_until_today_is_written():
    days = {date(2025, 3, 4), date(2025, 3, 3)}

    assert current_streak(days, TODAY) == 2
    assert current_streak(days, date(2025, 3, 6)) == 0


def test_excerpt():
    assert make_excerpt("short  text\nhere") == "short text here"
    long_text = "word " * 60
    excerpt = make_excerpt(long_text)
    assert excerpt.endswith("...")
    assert len(excerpt) <= 123
