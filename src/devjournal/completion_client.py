"""
補完APIクライアントモジュール

関連クラス:
  - config.CompletionConfig / config.OllamaConfig: 接続設定を提供
  - src/journal/summarizer.SummaryGenerator: このクライアントを使用
  - src/resume/importer.ResumeImporter: このクライアントを使用

注意: どちらのクライアントもシングルターン・非ストリーミングで、
生テキストを返します。JSONの抽出は json_extraction.extract_json が担当します。
"""

import logging
from typing import Any, Dict, List

import ollama
import requests

from .config import Config
from .exceptions import MalformedModelOutputError, UpstreamError


class CompletionClient:
    """補完APIクライアントの基底クラス"""

    def complete(self, prompt: str) -> str:
        """
        プロンプトを1ターンのユーザーメッセージとして送信し、応答テキストを返す

        Raises:
            UpstreamError: 補完APIが成功以外を返した、またはタイムアウトした場合
            MalformedModelOutputError: 応答にテキストが含まれない場合
        """
        raise NotImplementedError

    @staticmethod
    def _build_messages(prompt: str) -> List[Dict[str, str]]:
        return [{"role": "user", "content": prompt}]


class GatewayCompletionClient(CompletionClient):
    """OpenAI互換のchat/completionsエンドポイント用クライアント"""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        model: str = "google/gemini-2.5-flash",
        timeout: float = 60.0,
    ):
        """
        初期化

        Args:
            api_url: chat/completionsのURL
            api_key: Bearer認証に使うAPIキー
            model: 使用するモデル名
            timeout: リクエストのタイムアウト秒数
        """
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def complete(self, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(prompt),
        }
        try:
            response = requests.post(
                self.api_url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            self.logger.error(f"AI API timed out after {self.timeout}s: {e}")
            raise UpstreamError(f"AI API timed out after {self.timeout}s", body=str(e)) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(f"AI API request failed: {e}")
            raise UpstreamError(f"AI API request failed: {e}", body=str(e)) from e

        if not response.ok:
            self.logger.error(f"AI API error: {response.status_code} {response.text}")
            raise UpstreamError(
                f"AI API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        self.logger.info("AI response received")
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedModelOutputError("No content in AI response") from e

        if not content:
            raise MalformedModelOutputError("No content in AI response")
        return content


class OllamaCompletionClient(CompletionClient):
    """ローカルOllamaサーバー用クライアント"""

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llama3.1:8b",
        temperature: float = 0.7,
        max_tokens: int = 4096,
        timeout: float = 60.0,
    ):
        """
        初期化

        Args:
            host: OllamaサーバーのURL
            model: 使用するモデル名
            temperature: 生成温度（0.0-1.0）
            max_tokens: 最大トークン数
            timeout: リクエストのタイムアウト秒数
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = ollama.Client(host=host, timeout=timeout)

    def complete(self, prompt: str) -> str:
        try:
            response = self.client.chat(
                model=self.model,
                messages=self._build_messages(prompt),
                stream=False,
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
        except ollama.ResponseError as e:
            self.logger.error(f"Ollama chat error: {e.status_code} {e.error}")
            raise UpstreamError(
                f"AI API error: {e.status_code} - {e.error}",
                status_code=e.status_code,
                body=e.error,
            ) from e
        except Exception as e:
            # httpxのタイムアウト・接続エラー
            self.logger.error(f"Ollama request failed: {e}")
            raise UpstreamError(f"AI API request failed: {e}", body=str(e)) from e

        self.logger.info("AI response received")
        content = response["message"]["content"]
        if not content:
            raise MalformedModelOutputError("No content in AI response")
        return content


def create_completion_client(config: Config) -> CompletionClient:
    """設定のproviderに応じた補完クライアントを生成"""
    completion = config.completion
    if completion.provider == "ollama":
        return OllamaCompletionClient(
            host=config.ollama.host,
            model=config.ollama.model,
            temperature=config.ollama.temperature,
            max_tokens=config.ollama.max_tokens,
            timeout=completion.timeout_seconds,
        )
    if completion.provider == "gateway":
        return GatewayCompletionClient(
            api_url=completion.api_url,
            api_key=completion.api_key,
            model=completion.model,
            timeout=completion.timeout_seconds,
        )
    raise ValueError(f"Unknown completion provider: {completion.provider}")
