"""
履歴書ファイルからのテキスト抽出

拡張子でフォーマットを判定する:
  - .pdf  → PyPDF2でページごとにテキスト抽出
  - .docx → python-docxで段落を連結
  - その他 → UTF-8としてデコード（不正バイトは置換）
"""

import io
import logging
from pathlib import PurePosixPath

from docx import Document
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from src.devjournal.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")
TRUNCATION_MARKER = "... (truncated)"


def _extract_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, KeyError) as e:
        raise InvalidRequestError(f"Could not read PDF resume: {e}") from e
    return "\n".join(pages)


def _extract_docx(data: bytes) -> str:
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        # python-docxは壊れたzip/XMLに対して様々な例外を送出する
        raise InvalidRequestError(f"Could not read DOCX resume: {e}") from e
    return "\n".join(paragraph.text for paragraph in doc.paragraphs)


def extract_text(file_path: str, data: bytes) -> str:
    """
    ファイルパスの拡張子に応じてテキストを抽出

    Args:
        file_path: ストレージ上のパス（拡張子判定に使用）
        data: ファイルの生バイト列

    Returns:
        抽出したテキスト

    Raises:
        InvalidRequestError: PDF/DOCXとして読めない場合
    """
    suffix = PurePosixPath(file_path).suffix.lower()
    if suffix == ".pdf":
        text = _extract_pdf(data)
    elif suffix == ".docx":
        text = _extract_docx(data)
    else:
        text = data.decode("utf-8", errors="replace")

    logger.info(f"File content length: {len(text)} characters")
    return text


def truncate_text(text: str, max_chars: int = 5000) -> str:
    """先頭max_chars文字に切り詰め、切り詰めた場合はマーカーを付ける"""
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]} {TRUNCATION_MARKER}"
