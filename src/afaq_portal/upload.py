"""File uploads to platform storage or to external S3-compatible storage."""

import logging
import mimetypes
import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from .client import FilePart
from .context import AppContext
from .errors import PortalError, PortalSchemaError
from .models import Toast, UploadedFile, UploadStatus
from .pages import UPLOAD_STATUS_KEY

logger = logging.getLogger(__name__)

DEFAULT_FOLDER = "uploads"
PUBLIC_OBJECTS_PREFIX = "/public-objects/"

_BASE36 = string.digits + string.ascii_lowercase


class UploadBackend(str, Enum):
    PLATFORM = "platform"
    EXTERNAL = "external"


@dataclass
class LocalFile:
    """A file selected for upload."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path) -> "LocalFile":
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)

    def part(self, field_name: str) -> FilePart:
        return (field_name, (self.name, self.content, self.content_type))


@dataclass
class UploadOutcome:
    ok: bool
    message: str
    files: list[UploadedFile] = field(default_factory=list)
    toast: Optional[Toast] = None


def generate_object_name(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """Unique object name: ``file-<epoch ms>-<9 base36 characters>``."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    rng = rng or random.SystemRandom()
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"file-{now_ms}-{suffix}"


class FileUploader:
    """Uploads selected files and keeps the list uploaded in this session."""

    def __init__(self, ctx: AppContext, folder: str = DEFAULT_FOLDER):
        self.ctx = ctx
        self.folder = folder or DEFAULT_FOLDER
        self.uploaded: list[UploadedFile] = []
        self.status: Optional[UploadStatus] = None

    @property
    def external_available(self) -> bool:
        return self.status is not None and self.status.configured

    @property
    def disabled_reason(self) -> Optional[str]:
        if self.external_available:
            return None
        return self.ctx.t("upload.notConfigured")

    async def refresh_status(self) -> Optional[UploadStatus]:
        """Load the external storage configuration flag."""
        result = await self.ctx.cache.query(UPLOAD_STATUS_KEY, self.ctx.client.get_upload_status)
        if result.error is not None:
            self.ctx.boundary.report(result.error)
            logger.warning("Failed to check external storage status: %s", result.error)
        self.status = result.data
        return self.status

    async def upload(
        self,
        files: Sequence[LocalFile],
        backend: UploadBackend | str = UploadBackend.PLATFORM,
    ) -> UploadOutcome:
        """Upload ``files`` with the chosen backend.

        Failures are reported through a toast and the returned outcome; they
        are never retried.
        """
        backend = UploadBackend(backend)
        t = self.ctx.t

        if backend is UploadBackend.EXTERNAL:
            if self.status is None:
                await self.refresh_status()
            if not self.external_available:
                return UploadOutcome(ok=False, message=self.disabled_reason or "")

        if not files:
            toast = self.ctx.toaster.show(
                t("upload.empty.title"), t("upload.empty.description"), variant="destructive"
            )
            return UploadOutcome(ok=False, message=toast.description, toast=toast)

        try:
            if backend is UploadBackend.PLATFORM:
                uploaded = await self._upload_platform(files)
            else:
                uploaded = await self._upload_external(files)
        except PortalError as e:
            logger.warning("%s upload failed: %s", backend.value, e)
            if self.ctx.boundary.report(e):
                return UploadOutcome(ok=False, message=t("auth.unauthorized.description"))
            return self._failed()

        if not uploaded:
            return self._failed()

        self.uploaded.extend(uploaded)
        if len(files) > 1:
            description = t("upload.success.count", count=len(uploaded))
        elif backend is UploadBackend.PLATFORM:
            description = t("upload.success.platform")
        else:
            description = t("upload.success.single")
        toast = self.ctx.toaster.show(t("upload.success.title"), description)
        return UploadOutcome(ok=True, message=description, files=uploaded, toast=toast)

    def _failed(self) -> UploadOutcome:
        t = self.ctx.t
        toast = self.ctx.toaster.show(
            t("upload.failed.title"), t("upload.failed.description"), variant="destructive"
        )
        return UploadOutcome(ok=False, message=toast.description, toast=toast)

    async def _upload_platform(self, files: Sequence[LocalFile]) -> list[UploadedFile]:
        client = self.ctx.client
        uploaded = []
        for local in files:
            object_name = generate_object_name()
            try:
                target = await self.ctx.cache.mutate(
                    lambda: client.request_upload_target(object_name)
                )
                await client.put_object(target.upload_url, local.content, local.content_type)
            except PortalError as e:
                if len(files) == 1:
                    raise
                self.ctx.boundary.report(e)
                logger.warning("Platform upload of %s failed: %s", local.name, e)
                continue
            uploaded.append(
                UploadedFile(
                    name=local.name,
                    url=f"{PUBLIC_OBJECTS_PREFIX}{object_name}",
                    size=local.size,
                    type=local.content_type,
                    uploaded_at=datetime.now(),
                    method="platform",
                )
            )
        return uploaded

    async def _upload_external(self, files: Sequence[LocalFile]) -> list[UploadedFile]:
        client = self.ctx.client
        if len(files) == 1:
            stored = await self.ctx.cache.mutate(
                lambda: client.upload_file(files[0].part("file"), self.folder)
            )
            if not stored.ok:
                raise PortalSchemaError(stored.error or "Upload failed")
            results = [stored]
        else:
            batch = await self.ctx.cache.mutate(
                lambda: client.upload_files([f.part("files") for f in files], self.folder)
            )
            # Successful items are kept even when the batch as a whole is not ok.
            results = [r for r in batch.results if r.ok]
            failed = len(batch.results) - len(results)
            if failed:
                logger.info("%d of %d files failed to upload", failed, len(batch.results))

        return [
            UploadedFile(
                name=r.original_name,
                url=r.url,
                size=r.size,
                type=r.type,
                uploaded_at=datetime.now(),
                method="external",
            )
            for r in results
        ]
