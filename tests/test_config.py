"""
Configの読み込みテスト
"""

from src.devjournal.config import Config


def test_from_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("DEVJOURNAL_DB_PATH", raising=False)
    monkeypatch.setenv("DEVJOURNAL_COMPLETION_API_KEY", "from-env")
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text(
        """
completion:
  provider: ollama
  timeout_seconds: 15
ollama:
  model: qwen3:8b
storage:
  db_path: /tmp/journal.db
  max_upload_bytes: 1024
resume:
  max_chars: 2000
log:
  level: DEBUG
""",
        encoding="utf-8",
    )

    config = Config.from_yaml(config_path)

    assert config.completion.provider == "ollama"
    assert config.completion.timeout_seconds == 15.0
    assert config.completion.api_key == "from-env"
    assert config.ollama.model == "qwen3:8b"
    assert config.storage.db_path == "/tmp/journal.db"
    assert config.storage.max_upload_bytes == 1024
    assert config.storage.resume_bucket == "resumes"
    assert config.resume_max_chars == 2000
    assert config.log_level == "DEBUG"
    assert config.auth.jwt_algorithm == "HS256"


def test_env_overrides_secrets_and_db_path(tmp_path, monkeypatch):
    monkeypatch.setenv("DEVJOURNAL_JWT_SECRET", "prod-secret")
    monkeypatch.setenv("DEVJOURNAL_DB_PATH", str(tmp_path / "env.db"))
    config_path = tmp_path / "app_config.yaml"
    config_path.write_text("auth:\n  jwt_secret: yaml-secret\n", encoding="utf-8")

    config = Config.from_yaml(config_path)

    assert config.auth.jwt_secret == "prod-secret"
    assert config.storage.db_path == str(tmp_path / "env.db")


def test_missing_file_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("DEVJOURNAL_COMPLETION_API_KEY", raising=False)

    config = Config.from_yaml(tmp_path / "missing.yaml")

    assert config.completion.provider == "gateway"
    assert config.resume_max_chars == 5000
    assert config.storage.max_upload_bytes == 10 * 1024 * 1024


def test_bundled_config_loads():
    config = Config.from_yaml()

    assert config.auth.audience == "authenticated"
    assert config.storage.resume_bucket == "resumes"


def test_from_env(monkeypatch):
    monkeypatch.setenv("DEVJOURNAL_COMPLETION_PROVIDER", "ollama")
    monkeypatch.setenv("DEVJOURNAL_COMPLETION_TIMEOUT", "5")
    monkeypatch.setenv("DEVJOURNAL_JWT_SECRET", "env-secret")
    monkeypatch.setenv("DEVJOURNAL_JWT_AUDIENCE", "authenticated")
    monkeypatch.setenv("DEVJOURNAL_DB_PATH", "/tmp/env.db")
    monkeypatch.setenv("OLLAMA_MODEL", "qwen3:8b")

    config = Config.from_env()

    assert config.completion.provider == "ollama"
    assert config.completion.timeout_seconds == 5.0
    assert config.auth.jwt_secret == "env-secret"
    assert config.auth.audience == "authenticated"
    assert config.storage.db_path == "/tmp/env.db"
    assert config.ollama.model == "qwen3:8b"
