# folio/app/services/media.py
"""
Client for the external media host (Cloudinary).

Only the returned URL and public id are stored; the bytes never touch the
database. Calls go over plain HTTPS with signed parameters, using requests,
and run in the default executor so the event loop is never blocked.

Nothing here retries: a failed call raises MediaHostError straight away.
"""
import asyncio
import hashlib
import logging
import time
from dataclasses import dataclass
from functools import lru_cache, partial
from typing import Dict, Optional

import requests

from folio.app.core.config import settings
from folio.app.core.errors import MediaHostError

logger = logging.getLogger(__name__)

API_BASE = "https://api.cloudinary.com/v1_1"

IMAGE = "image"
RAW = "raw"


@dataclass(frozen=True)
class MediaUpload:
    url: str
    public_id: str


def sign(params: Dict[str, str], api_secret: str) -> str:
    """
    Cloudinary request signature: SHA-1 of the sorted key=value pairs
    joined by '&', followed by the API secret.
    """
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1((payload + api_secret).encode("utf-8")).hexdigest()


def media_folder(*parts: str) -> str:
    """'posts' -> 'portfolio/posts'"""
    return "/".join((settings.MEDIA_ROOT_FOLDER,) + parts)


class CloudinaryHost:
    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: int = 30,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.http = requests.Session()

    def _endpoint(self, resource_type: str, operation: str) -> str:
        return f"{API_BASE}/{self.cloud_name}/{resource_type}/{operation}"

    def _signed(self, params: Dict[str, str]) -> Dict[str, str]:
        params = dict(params, timestamp=str(int(time.time())))
        params["signature"] = sign(params, self.api_secret)
        params["api_key"] = self.api_key
        return params

    # ── blocking calls, run through _run() ────────────────────────────────
    def _upload(self, data: bytes, folder: str, resource_type: str, filename: str) -> MediaUpload:
        try:
            response = self.http.post(
                self._endpoint(resource_type, "upload"),
                data=self._signed({"folder": folder}),
                files={"file": (filename, data)},
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Upload to %s failed: %s", folder, e)
            raise MediaHostError("Failed to upload file")

        return MediaUpload(url=body["secure_url"], public_id=body["public_id"])

    def _destroy(self, public_id: str, resource_type: str) -> bool:
        try:
            response = self.http.post(
                self._endpoint(resource_type, "destroy"),
                data=self._signed({"public_id": public_id}),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json().get("result") == "ok"
        except (requests.RequestException, ValueError) as e:
            logger.error("Delete of %s failed: %s", public_id, e)
            raise MediaHostError("Failed to delete file")

    def _fetch(self, url: str) -> bytes:
        try:
            response = self.http.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Fetch of %s failed: %s", url, e)
            raise MediaHostError("Failed to fetch file")
        return response.content

    async def _run(self, func, *args):
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise MediaHostError("Media host is not configured")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    # ── public API ────────────────────────────────────────────────────────
    async def upload(
        self,
        data: bytes,
        folder: str,
        resource_type: str = IMAGE,
        filename: str = "upload",
    ) -> MediaUpload:
        return await self._run(self._upload, data, folder, resource_type, filename)

    async def delete(self, public_id: str) -> bool:
        """Delete by public id, trying images first and then raw files (CVs)."""
        if await self._run(self._destroy, public_id, IMAGE):
            return True
        return await self._run(self._destroy, public_id, RAW)

    async def fetch(self, url: str) -> bytes:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._fetch, url)


async def discard(host, public_id: Optional[str]) -> None:
    """
    Best-effort removal of a replaced or orphaned file.

    A failure is logged and swallowed: the record update that follows must
    still happen.
    """
    if not public_id:
        return
    try:
        await host.delete(public_id)
    except MediaHostError:
        logger.warning("Could not delete %s from the media host", public_id)


@lru_cache()
def get_media_host() -> CloudinaryHost:
    """FastAPI dependency; overridden in tests with an in-memory host."""
    return CloudinaryHost(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        timeout=settings.MEDIA_TIMEOUT_SECONDS,
    )
