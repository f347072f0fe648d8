"""
LocalBlobStoreのテスト
"""

import pytest

from src.devjournal.exceptions import StorageError
from src.resume.storage import LocalBlobStore


@pytest.fixture
def store(tmp_path):
    return LocalBlobStore(tmp_path / "storage", bucket="resumes")


def test_upload_download_delete(store, tmp_path):
    store.upload("user-1/cv.pdf", b"%PDF-1.4 data")

    assert (tmp_path / "storage" / "resumes" / "user-1" / "cv.pdf").is_file()
    assert store.exists("user-1/cv.pdf")
    assert store.download("user-1/cv.pdf") == b"%PDF-1.4 data"

    store.delete("user-1/cv.pdf")
    assert not store.exists("user-1/cv.pdf")


def test_upload_does_not_overwrite(store):
    store.upload("user-1/cv.txt", b"first")

    with pytest.raises(StorageError):
        store.upload("user-1/cv.txt", b"second")
    assert store.download("user-1/cv.txt") == b"first"


@pytest.mark.parametrize("path", ["", "/etc/passwd", "user-1/../../secret", "..\\x"])
def test_paths_outside_bucket_are_rejected(store, path):
    with pytest.raises(StorageError):
        store.download(path)


def test_missing_objects(store):
    with pytest.raises(StorageError):
        store.download("user-1/missing.pdf")
    with pytest.raises(StorageError):
        store.delete("user-1/missing.pdf")
