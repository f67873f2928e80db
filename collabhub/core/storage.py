# collabhub/core/storage.py
# 物件儲存：以 bucket + path 存放檔案，並產生公開 URL
# (檔案寫在 STORAGE_ROOT 底下，由 main.py 掛載的 StaticFiles 提供下載)
import logging
import os
import uuid
from pathlib import Path, PurePosixPath

import aiofiles
from fastapi import HTTPException, UploadFile, status

from collabhub.core.config import settings

logger = logging.getLogger(__name__)

AVATAR_BUCKET = "avatars"
MARKETPLACE_BUCKET = "marketplace-images"


class LocalObjectStorage:
    def __init__(self, root: str | None = None, url_prefix: str | None = None):
        self.root = Path(root or settings.STORAGE_ROOT).resolve()
        self.url_prefix = (url_prefix or settings.STORAGE_URL_PREFIX).rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        """
        把 bucket/path 轉成實際檔案路徑，拒絕跳出 bucket 的路徑 (e.g. '../')
        """
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無效的檔案路徑")
        bucket_dir = (self.root / bucket).resolve()
        return bucket_dir.joinpath(*relative.parts)

    async def upload(self, bucket: str, path: str, data: bytes) -> str:
        file_path = self._resolve(bucket, path)
        os.makedirs(file_path.parent, exist_ok=True)
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.error(f"檔案儲存失敗 {bucket}/{path}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="檔案儲存失敗"
            )
        logger.info(f"Stored object {bucket}/{path} ({len(data)} bytes)")
        return path

    def delete(self, bucket: str, path: str) -> bool:
        """刪除檔案，檔案不存在時回傳 False"""
        file_path = self._resolve(bucket, path)
        if not file_path.exists():
            return False
        os.remove(file_path)
        logger.info(f"Deleted object {bucket}/{path}")
        return True

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.url_prefix}/{bucket}/{PurePosixPath(path).as_posix()}"


async def read_image_upload(file: UploadFile) -> bytes:
    """
    讀取並驗證一張上傳圖片 (僅限 image/*，大小上限 MAX_IMAGE_SIZE_MB)
    """
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{file.filename} 不是圖片檔"
        )
    content = await file.read()
    if len(content) > settings.MAX_IMAGE_SIZE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{file.filename} 超過 {settings.MAX_IMAGE_SIZE_MB}MB"
        )
    return content


async def store_image(
    storage: LocalObjectStorage, bucket: str, folder: str, filename: str | None, content: bytes
) -> str:
    """以 uuid 產生檔名 (只保留原副檔名) 後寫入，回傳公開 URL"""
    suffix = Path(filename or "").suffix.lower()
    path = f"{folder}/{uuid.uuid4()}{suffix}"
    await storage.upload(bucket, path, content)
    return storage.public_url(bucket, path)


async def save_image_upload(
    storage: LocalObjectStorage, bucket: str, folder: str, file: UploadFile
) -> str:
    """驗證並儲存一張上傳圖片"""
    content = await read_image_upload(file)
    return await store_image(storage, bucket, folder, file.filename, content)


def get_storage() -> LocalObjectStorage:
    """FastAPI Dependency: 取得物件儲存"""
    return LocalObjectStorage()
