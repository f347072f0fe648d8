"""
DevJournalのロギング設定

create_app() が起動時に Config.log_level / Config.log_file を渡して呼び出す。
パイプライン（要約生成・履歴書取り込み）と各ルートは logging.getLogger(__name__)
で取得したロガーに書き込み、出力はファイルと標準エラーの両方に流れる。
"""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(log_level: str = "INFO", log_file: str = "logs/devjournal.log") -> None:
    """
    ルートロガーにファイル・ストリームハンドラを設定

    既に設定済みの場合は何もしない（テストでcreate_appを複数回呼んでも重複しない）。

    Args:
        log_level: ログレベル名（不明な値はINFO扱い）
        log_file: ログファイルのパス（親ディレクトリは自動作成）
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
