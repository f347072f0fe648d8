"""
ロギング設定のテスト
"""

from src.devjournal.logger import setup_logger


def test_setup_logger_creates_log_directory(tmp_path):
    log_file = tmp_path / "nested" / "logs" / "devjournal.log"

    setup_logger(log_level="debug", log_file=str(log_file))

    assert log_file.parent.is_dir()


def test_setup_logger_accepts_unknown_level(tmp_path):
    setup_logger(log_level="verbose", log_file=str(tmp_path / "devjournal.log"))
