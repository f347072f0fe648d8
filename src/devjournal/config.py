"""
設定管理モジュール

関連クラス:
  - completion_client.create_completion_client: completion / ollama 設定を使用
  - identity.JwtIdentityVerifier: auth 設定を使用
  - src/server/dependencies.py: 各依存オブジェクトの生成に使用

秘密情報（APIキー、JWTシークレット）はYAMLではなく環境変数から読み込む。
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "app_config.yaml"


@dataclass
class CompletionConfig:
    """補完API設定"""

    provider: str = "gateway"  # gateway | ollama
    api_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    api_key: str = ""
    model: str = "google/gemini-2.5-flash"
    timeout_seconds: float = 60.0


@dataclass
class OllamaConfig:
    """Ollama API設定（provider=ollamaの場合に使用）"""

    host: str = "http://localhost:11434"
    model: str = "llama3.1:8b"
    temperature: float = 0.7
    max_tokens: int = 4096


@dataclass
class AuthConfig:
    """JWT検証設定"""

    jwt_secret: str = "devjournal-dev-secret"
    jwt_algorithm: str = "HS256"
    audience: Optional[str] = None


@dataclass
class StorageConfig:
    """データストア・ブロブストア設定"""

    db_path: str = "data/devjournal.db"
    blob_dir: str = "data/storage"
    resume_bucket: str = "resumes"
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB


@dataclass(eq=False)
class Config:
    """
    アプリケーション設定クラス

    インスタンス単位でハッシュ可能（サーバーの依存オブジェクトは設定インスタンスごとにキャッシュされる）
    """

    completion: CompletionConfig = None  # type: ignore
    ollama: OllamaConfig = None  # type: ignore
    auth: AuthConfig = None  # type: ignore
    storage: StorageConfig = None  # type: ignore

    # 履歴書テキストの最大文字数
    resume_max_chars: int = 5000

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/devjournal.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.completion is None:
            self.completion = CompletionConfig()
        if self.ollama is None:
            self.ollama = OllamaConfig()
        if self.auth is None:
            self.auth = AuthConfig()
        if self.storage is None:
            self.storage = StorageConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス（環境変数で秘密情報・DBパスを上書き済み）
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file not found: {config_path}, using defaults")
            return cls._apply_env(cls())

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        completion_data = yaml_data.get("completion", {})
        ollama_data = yaml_data.get("ollama", {})
        auth_data = yaml_data.get("auth", {})
        storage_data = yaml_data.get("storage", {})
        resume_data = yaml_data.get("resume", {})
        log_data = yaml_data.get("log", {})

        defaults_completion = CompletionConfig()
        defaults_ollama = OllamaConfig()
        defaults_auth = AuthConfig()
        defaults_storage = StorageConfig()

        config = cls(
            completion=CompletionConfig(
                provider=completion_data.get("provider", defaults_completion.provider),
                api_url=completion_data.get("api_url", defaults_completion.api_url),
                model=completion_data.get("model", defaults_completion.model),
                timeout_seconds=float(
                    completion_data.get(
                        "timeout_seconds", defaults_completion.timeout_seconds
                    )
                ),
            ),
            ollama=OllamaConfig(
                host=ollama_data.get("host", defaults_ollama.host),
                model=ollama_data.get("model", defaults_ollama.model),
                temperature=ollama_data.get("temperature", defaults_ollama.temperature),
                max_tokens=ollama_data.get("max_tokens", defaults_ollama.max_tokens),
            ),
            auth=AuthConfig(
                jwt_secret=auth_data.get("jwt_secret", defaults_auth.jwt_secret),
                jwt_algorithm=auth_data.get("jwt_algorithm", defaults_auth.jwt_algorithm),
                audience=auth_data.get("audience", defaults_auth.audience),
            ),
            storage=StorageConfig(
                db_path=storage_data.get("db_path", defaults_storage.db_path),
                blob_dir=storage_data.get("blob_dir", defaults_storage.blob_dir),
                resume_bucket=storage_data.get(
                    "resume_bucket", defaults_storage.resume_bucket
                ),
                max_upload_bytes=int(
                    storage_data.get(
                        "max_upload_bytes", defaults_storage.max_upload_bytes
                    )
                ),
            ),
            resume_max_chars=int(resume_data.get("max_chars", 5000)),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/devjournal.log"),
        )
        return cls._apply_env(config)

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数のみから設定を読み込む（コンテナ実行用）"""
        config = cls(
            completion=CompletionConfig(
                provider=os.getenv("DEVJOURNAL_COMPLETION_PROVIDER", "gateway"),
                api_url=os.getenv(
                    "DEVJOURNAL_COMPLETION_API_URL",
                    "https://ai.gateway.lovable.dev/v1/chat/completions",
                ),
                model=os.getenv("DEVJOURNAL_COMPLETION_MODEL", "google/gemini-2.5-flash"),
                timeout_seconds=float(os.getenv("DEVJOURNAL_COMPLETION_TIMEOUT", "60")),
            ),
            ollama=OllamaConfig(
                host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                model=os.getenv("OLLAMA_MODEL", "llama3.1:8b"),
            ),
            auth=AuthConfig(
                jwt_algorithm=os.getenv("DEVJOURNAL_JWT_ALGORITHM", "HS256"),
                audience=os.getenv("DEVJOURNAL_JWT_AUDIENCE") or None,
            ),
            storage=StorageConfig(
                blob_dir=os.getenv("DEVJOURNAL_BLOB_DIR", "data/storage"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/devjournal.log"),
        )
        return cls._apply_env(config)

    @staticmethod
    def _apply_env(config: "Config") -> "Config":
        """秘密情報とDBパスを環境変数で上書き"""
        api_key = os.getenv("DEVJOURNAL_COMPLETION_API_KEY")
        if api_key:
            config.completion.api_key = api_key
        jwt_secret = os.getenv("DEVJOURNAL_JWT_SECRET")
        if jwt_secret:
            config.auth.jwt_secret = jwt_secret
        db_path = os.getenv("DEVJOURNAL_DB_PATH")
        if db_path:
            config.storage.db_path = db_path
        return config
