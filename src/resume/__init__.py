"""Resume import: blob storage, text extraction and LLM-driven entry extraction."""

from .importer import ResumeImporter
from .storage import LocalBlobStore
from .text_extractor import SUPPORTED_EXTENSIONS, extract_text, truncate_text

__all__ = [
    "ResumeImporter",
    "LocalBlobStore",
    "SUPPORTED_EXTENSIONS",
    "extract_text",
    "truncate_text",
]
