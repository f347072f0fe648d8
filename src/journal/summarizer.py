"""
SummaryGenerator: LLMベースのジャーナル全体サマリー生成器

処理の流れ（各ステージは失敗時に例外で即終了、リトライなし）:
1. オーナーの全エントリーを新しい順に取得（0件ならNoEntriesError）
2. エントリーをプロンプトに直列化
3. 補完APIを1回呼び出し
4. 応答から {...} を抽出してGeneratedSummaryとして検証

関連:
- src/journal/repository.py: エントリー取得
- src/journal/prompts.py: プロンプト構築
- src/devjournal/completion_client.py: LLM推論
- src/devjournal/json_extraction.py: 応答からのJSON抽出
"""

import logging

from pydantic import ValidationError

from src.devjournal.completion_client import CompletionClient
from src.devjournal.exceptions import MalformedModelOutputError, NoEntriesError
from src.devjournal.json_extraction import JsonKind, extract_json

from .models import GeneratedSummary
from .prompts import build_summary_prompt
from .repository import JournalRepository

logger = logging.getLogger(__name__)


class SummaryGenerator:
    """ジャーナル全体のAIサマリー生成器"""

    def __init__(
        self,
        repository: JournalRepository,
        completion_client: CompletionClient,
    ):
        """
        初期化

        Args:
            repository: エントリーの取得元（テスト用にDI可能）
            completion_client: 補完APIクライアント（テスト用にDI可能）
        """
        self.repository = repository
        self.completion_client = completion_client

    def generate(self, owner: str) -> GeneratedSummary:
        """
        オーナーの全エントリーからサマリーを生成

        Args:
            owner: 認証済みの呼び出し元ID

        Returns:
            GeneratedSummary

        Raises:
            NoEntriesError: エントリーが0件
            PersistenceError: エントリー取得失敗
            UpstreamError: 補完APIエラー
            MalformedModelOutputError: 応答に有効なサマリーJSONが無い
        """
        logger.info(f"Fetching entries for user: {owner}")
        entries = self.repository.list(owner)
        if not entries:
            raise NoEntriesError()

        logger.info(f"Found {len(entries)} entries, generating summary...")
        prompt = build_summary_prompt(entries)

        content = self.completion_client.complete(prompt)
        summary = self._parse_summary(content)

        logger.info("Summary generated successfully")
        return summary

    @staticmethod
    def _parse_summary(content: str) -> GeneratedSummary:
        try:
            data = extract_json(content, JsonKind.OBJECT)
        except MalformedModelOutputError:
            logger.error(f"Could not extract JSON from response: {content}")
            raise

        try:
            return GeneratedSummary.model_validate(data)
        except ValidationError as e:
            logger.error(f"Summary JSON did not match the expected shape: {e}")
            raise MalformedModelOutputError(
                "Invalid JSON response from AI: summary fields missing or malformed"
            ) from e
