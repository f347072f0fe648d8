"""
Journal module for developer journal entries.

This module provides functionality for:
- Owner-scoped journal entry storage
- Dashboard statistics
- LLM-powered summaries of the whole journal
"""

from src.journal.models import EntryDraft, GeneratedSummary, JournalEntry, parse_tags
from src.journal.repository import UNSET, JournalRepository
from src.journal.stats import DashboardStats, compute_dashboard
from src.journal.summarizer import SummaryGenerator

__all__ = [
    "EntryDraft",
    "GeneratedSummary",
    "JournalEntry",
    "parse_tags",
    "UNSET",
    "JournalRepository",
    "DashboardStats",
    "compute_dashboard",
    "SummaryGenerator",
]
