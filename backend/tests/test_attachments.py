# 첨부 이미지 저장 테스트 (DB 의존성 없음)
import asyncio
import io
from unittest.mock import patch

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.core.exceptions import TooManyAttachments, UnsupportedAttachment
from app.models.post import MAX_IMAGES_PER_POST
from app.services.attachment_service import AttachmentStore


def make_upload(name: str, data: bytes, content_type: str = "image/png") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=name, headers=Headers({"content-type": content_type}))


@pytest.fixture
def store(tmp_path):
    return AttachmentStore(tmp_path / "uploads", "http://localhost:8000/", "/uploads")


def test_store_writes_files_and_returns_absolute_urls(store):
    files = [make_upload("a.PNG", b"one"), make_upload("b.jpg", b"two", "image/jpeg"), make_upload("c", b"three")]
    urls = asyncio.run(store.store(files))
    assert len(urls) == 3
    assert all(u.startswith("http://localhost:8000/uploads/") for u in urls)
    assert urls[0].endswith(".png")
    assert urls[1].endswith(".jpg")
    assert [store.path_for(u).read_bytes() for u in urls] == [b"one", b"two", b"three"]


def test_filenames_are_unique_for_same_original_name(store):
    urls = asyncio.run(store.store([make_upload("same.png", b"x"), make_upload("same.png", b"y")]))
    assert len(set(urls)) == 2


def test_more_than_max_files_is_rejected_before_writing(store):
    files = [make_upload(f"{i}.png", b"x") for i in range(4)]
    with pytest.raises(TooManyAttachments):
        asyncio.run(store.store(files))
    assert not store.upload_dir.exists() or not any(store.upload_dir.iterdir())


def test_non_image_is_rejected_before_writing(store):
    files = [make_upload("ok.png", b"x"), make_upload("notes.txt", b"y", "text/plain")]
    with pytest.raises(UnsupportedAttachment):
        asyncio.run(store.store(files))
    assert not store.upload_dir.exists() or not any(store.upload_dir.iterdir())


def test_storage_failure_propagates_and_cleans_up(store):
    real_write = AttachmentStore._write
    calls = []

    def flaky_write(path, data):
        calls.append(path)
        if len(calls) == 2:
            raise OSError("disk full")
        real_write(path, data)

    with patch.object(AttachmentStore, "_write", side_effect=flaky_write):
        with pytest.raises(OSError):
            asyncio.run(store.store([make_upload("a.png", b"1"), make_upload("b.png", b"2")]))
    assert not calls[0].exists()


def test_discard_ignores_missing_files(store):
    asyncio.run(store.discard(["http://localhost:8000/uploads/missing.png"]))


def test_max_files_cannot_exceed_post_limit(tmp_path):
    loose = AttachmentStore(tmp_path / "uploads", "http://localhost:8000", max_files=5)
    assert loose.max_files == MAX_IMAGES_PER_POST
    with pytest.raises(TooManyAttachments):
        asyncio.run(loose.store([make_upload(f"{i}.png", b"x") for i in range(4)]))
