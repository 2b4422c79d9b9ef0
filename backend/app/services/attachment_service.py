# 첨부 이미지 저장 서비스
# - 게시글당 최대 3장, 이미지 content-type만 허용
# - 파일명은 uuid4 + 원본 확장자 (동시 업로드 시 이름 충돌 없음)
# - 로컬 디렉토리에 저장하고, 정적 파일 경로 기준의 절대 URL을 반환

import logging
import uuid
from pathlib import Path, PurePath
from typing import List, Sequence

from fastapi import Depends, UploadFile
from fastapi.concurrency import run_in_threadpool

from ..core.config import Settings, get_app_settings
from ..core.exceptions import TooManyAttachments, UnsupportedAttachment
from ..models.post import MAX_IMAGES_PER_POST

logger = logging.getLogger(__name__)


class AttachmentStore:
    def __init__(self, upload_dir: Path, public_base_url: str, url_prefix: str = "/uploads", max_files: int = MAX_IMAGES_PER_POST):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.base_url = public_base_url.rstrip("/") + self.url_prefix
        # Post 모델의 상한을 넘을 수 없음
        self.max_files = min(max_files, MAX_IMAGES_PER_POST)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AttachmentStore":
        return cls(
            settings.UPLOAD_DIR,
            settings.PUBLIC_BASE_URL,
            settings.UPLOAD_URL_PREFIX,
        )

    def check(self, files: Sequence[UploadFile]) -> None:
        """저장 전에 개수/형식을 검사합니다. 하나라도 어긋나면 아무것도 저장하지 않습니다."""
        if len(files) > self.max_files:
            raise TooManyAttachments(self.max_files)
        for upload in files:
            if not (upload.content_type or "").startswith("image/"):
                raise UnsupportedAttachment(upload.filename, upload.content_type)

    def make_filename(self, original_name: str) -> str:
        return uuid.uuid4().hex + PurePath(original_name or "").suffix.lower()

    def url_for(self, filename: str) -> str:
        return f"{self.base_url}/{filename}"

    def path_for(self, url: str) -> Path:
        return self.upload_dir / url.rsplit("/", 1)[-1]

    async def store(self, files: Sequence[UploadFile]) -> List[str]:
        self.check(files)
        urls = []
        try:
            for upload in files:
                filename = self.make_filename(upload.filename)
                data = await upload.read()
                await run_in_threadpool(self._write, self.upload_dir / filename, data)
                urls.append(self.url_for(filename))
                logger.info(f"[Attachments] Stored {filename} ({len(data)} bytes)")
        except OSError:
            # 일부만 저장된 경우 정리 후 그대로 전파 (재시도 없음)
            await self.discard(urls)
            raise
        return urls

    async def discard(self, urls: Sequence[str]) -> None:
        for url in urls:
            path = self.path_for(url)
            try:
                await run_in_threadpool(path.unlink, True)
            except OSError as e:
                logger.warning(f"[Attachments] Could not remove {path}: {e}")

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


def get_attachment_store(settings: Settings = Depends(get_app_settings)) -> AttachmentStore:
    return AttachmentStore.from_settings(settings)
