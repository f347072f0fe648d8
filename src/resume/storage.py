"""
ローカルファイルシステム上のブロブストア

バケットごとにサブディレクトリを持ち、オブジェクトは
"/" 区切りの相対パスで扱う（例: "<owner>/1700000000000-resume.pdf"）。
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from src.devjournal.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """ディレクトリをバケットとして使うブロブストア"""

    def __init__(self, root_dir: Path, bucket: str = "resumes"):
        """
        Args:
            root_dir: ストレージのルートディレクトリ
            bucket: バケット名（root_dir直下のサブディレクトリ）
        """
        self.bucket = bucket
        self.bucket_dir = (Path(root_dir) / bucket).resolve()
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def _resolve(self, path: str) -> Path:
        """オブジェクトパスを実ファイルパスに変換（バケット外への脱出は拒否）"""
        if not path or not path.strip():
            raise StorageError("Object path is required")
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or "\\" in path:
            raise StorageError(f"Invalid object path: {path}")
        return self.bucket_dir.joinpath(*relative.parts)

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def upload(self, path: str, data: bytes) -> str:
        target = self._resolve(path)
        if target.exists():
            raise StorageError(f"Object already exists: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to upload {self.bucket}/{path}: {e}")
            raise StorageError(f"Failed to upload object: {path}") from e
        logger.info(f"Uploaded {len(data)} bytes to {self.bucket}/{path}")
        return path

    def download(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise StorageError(f"Object not found: {path}")
        try:
            return target.read_bytes()
        except OSError as e:
            logger.error(f"Failed to download {self.bucket}/{path}: {e}")
            raise StorageError(f"Failed to download object: {path}") from e

    def delete(self, path: str) -> None:
        target = self._resolve(path)
        if not target.is_file():
            raise StorageError(f"Object not found: {path}")
        try:
            target.unlink()
        except OSError as e:
            logger.error(f"Failed to delete {self.bucket}/{path}: {e}")
            raise StorageError(f"Failed to delete object: {path}") from e
