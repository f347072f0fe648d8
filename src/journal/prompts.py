"""
AIサマリー用プロンプト構築

関連:
  - summarizer.SummaryGenerator: このプロンプトを補完APIに送信
"""

from datetime import datetime
from typing import Sequence

from .models import JournalEntry

ENTRY_SEPARATOR = "\n---\n"


def format_entry_date(timestamp: str) -> str:
    """ISO8601タイムスタンプを M/D/YYYY 形式にする"""
    created = datetime.fromisoformat(timestamp)
    return f"{created.month}/{created.day}/{created.year}"


def format_entry_block(index: int, entry: JournalEntry) -> str:
    """1エントリーをプロンプト用のテキストブロックに変換（indexは1始まり）"""
    return (
        f"Entry {index} ({format_entry_date(entry.created_at)}):\n"
        f"Title: {entry.title}\n"
        f"Category: {entry.category or 'None'}\n"
        f"Tags: {', '.join(entry.tags) or 'None'}\n"
        f"Content: {entry.content}\n"
    )


def serialize_entries(entries: Sequence[JournalEntry]) -> str:
    """取得順（新しい順）を保ったままエントリー群を連結"""
    return ENTRY_SEPARATOR.join(
        format_entry_block(idx, entry) for idx, entry in enumerate(entries, 1)
    )


def build_summary_prompt(entries: Sequence[JournalEntry]) -> str:
    return f"""You are an AI assistant analyzing a developer's journal entries. Based on the following {len(entries)} journal entries, provide a comprehensive analysis in JSON format.

Journal Entries:
{serialize_entries(entries)}

Please analyze these entries and provide:
1. A concise overview (2-3 sentences) of their development journey and progress
2. 3-4 key insights about their learning patterns, work style, or growth areas
3. 2-3 recent achievements or milestones
4. A list of technologies/topics they're focusing on (extract from categories, tags, and content)
5. 3-4 actionable recommendations for their continued growth

Return ONLY a valid JSON object with this exact structure:
{{
  "overview": "string",
  "insights": ["string", "string", "string"],
  "achievements": ["string", "string", "string"],
  "technologies": ["string", "string", ...],
  "recommendations": ["string", "string", "string"]
}}"""
