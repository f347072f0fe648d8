"""
ResumeImporter: 履歴書からジャーナルエントリーを一括作成

処理の流れ（各ステージは失敗時に例外で即終了、リトライなし）:
1. ファイルパスの検証（オーナー自身のフォルダ配下のみ）
2. ブロブストアからダウンロードしてテキスト抽出・切り詰め
3. 抽出プロンプトで補完APIを1回呼び出し
4. 応答から [...] を抽出し、全要素をEntryDraftとして検証
5. 1トランザクションで一括挿入（全件成功か0件）
最後に、成否に関わらずアップロード元ファイルを削除する。

関連:
- src/resume/storage.py: ブロブストア
- src/resume/text_extractor.py: PDF/DOCX/テキストの読み取り
- src/journal/repository.py: 一括挿入
"""

import logging
from typing import List

from src.devjournal.completion_client import CompletionClient
from src.devjournal.exceptions import (
    InvalidRequestError,
    MalformedModelOutputError,
    StorageError,
    UpstreamError,
)
from src.devjournal.json_extraction import JsonKind, extract_json
from src.journal.models import EntryDraft
from src.journal.repository import JournalRepository

from .prompts import build_resume_prompt
from .storage import LocalBlobStore
from .text_extractor import extract_text, truncate_text

logger = logging.getLogger(__name__)


class ResumeImporter:
    """アップロード済み履歴書をジャーナルエントリーに変換する"""

    def __init__(
        self,
        repository: JournalRepository,
        blob_store: LocalBlobStore,
        completion_client: CompletionClient,
        max_chars: int = 5000,
    ):
        """
        初期化

        Args:
            repository: エントリーの保存先
            blob_store: アップロードされた履歴書の保存先
            completion_client: 補完APIクライアント
            max_chars: プロンプトに含める履歴書テキストの最大文字数
        """
        self.repository = repository
        self.blob_store = blob_store
        self.completion_client = completion_client
        self.max_chars = max_chars

    def import_resume(self, owner: str, file_path: str) -> int:
        """
        履歴書を解析してエントリーを作成

        Args:
            owner: 認証済みの呼び出し元ID
            file_path: ブロブストア上のパス

        Returns:
            作成したエントリー数

        Raises:
            InvalidRequestError: ファイルパスが無い、ファイルが読めない
            StorageError: ダウンロード失敗
            UpstreamError: 補完APIエラー
            MalformedModelOutputError: 応答に有効なエントリー配列が無い
            PersistenceError: 挿入失敗
        """
        if not file_path or not file_path.strip():
            raise InvalidRequestError("File path is required")

        try:
            return self._run(owner, file_path)
        finally:
            self._cleanup(owner, file_path)

    def _run(self, owner: str, file_path: str) -> int:
        logger.info(f"Downloading file: {file_path}")
        data = self._download(owner, file_path)
        logger.info(f"File downloaded ({len(data)} bytes), reading content...")

        text = truncate_text(extract_text(file_path, data), self.max_chars)
        prompt = build_resume_prompt(text)

        logger.info("Calling completion API to parse resume...")
        content = self._complete(prompt)
        drafts = self._parse_drafts(content)
        logger.info(f"Parsed {len(drafts)} entries from resume")

        created = self.repository.bulk_create(owner, drafts)
        logger.info("Entries successfully created")
        return len(created)

    def _complete(self, prompt: str) -> str:
        try:
            return self.completion_client.complete(prompt)
        except UpstreamError as e:
            if e.status_code is None:
                raise
            # 上流の応答本文は利用者に返さない
            raise UpstreamError(
                f"AI API error: {e.status_code}", status_code=e.status_code, body=e.body
            ) from e

    def _download(self, owner: str, file_path: str) -> bytes:
        # オーナー自身のフォルダ以外は存在しないものとして扱う
        if not file_path.startswith(f"{owner}/"):
            raise StorageError(f"Object not found: {file_path}")
        return self.blob_store.download(file_path)

    @staticmethod
    def _parse_drafts(content: str) -> List[EntryDraft]:
        try:
            items = extract_json(content, JsonKind.ARRAY)
        except MalformedModelOutputError:
            logger.error(f"Could not extract JSON array from response: {content}")
            raise

        drafts: List[EntryDraft] = []
        for index, item in enumerate(items, 1):
            try:
                drafts.append(EntryDraft.from_mapping(item))
            except ValueError as e:
                raise MalformedModelOutputError(
                    f"Invalid JSON response from AI: entry {index} {e}"
                ) from e
        return drafts

    def _cleanup(self, owner: str, file_path: str) -> None:
        """元ファイルの削除（失敗しても元のエラーは隠さない）"""
        if not file_path.startswith(f"{owner}/"):
            return
        try:
            self.blob_store.delete(file_path)
            logger.info(f"Deleted uploaded resume: {file_path}")
        except StorageError as e:
            logger.warning(f"Failed to delete uploaded resume {file_path}: {e}")
