"""
Filesystem storage for uploaded videos.

Uploads are written to a staging file outside the served root, promoted to
their final name without ever replacing an existing file and removed again
if anything fails before the caller marks them as kept.
"""

import logging
import os
import threading
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles

from clipshare.core.errors import PayloadTooLarge
from clipshare.services.uploader.interfaces import VideoStorage

logger = logging.getLogger(__name__)


class TimestampNamer:
    """Millisecond timestamps, strictly increasing within the process"""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def next_stamp(self) -> int:
        with self._lock:
            stamp = max(int(time.time() * 1000), self._last + 1)
            self._last = stamp
        return stamp


class StagedVideo:
    """One upload in flight"""

    def __init__(self, storage: "LocalVideoStorage", suffix: str):
        self.storage = storage
        self.suffix = suffix
        self.name = storage.next_name(suffix)
        self.staging_path = storage.staging_dir / f"{uuid.uuid4().hex}{suffix}.part"
        self.size = 0
        self.promoted = False
        self.kept = False

    @property
    def final_path(self) -> Path:
        return self.storage.root / self.name

    @property
    def video_path(self) -> str:
        return self.storage.public_path(self.name)

    async def write_from(self, stream, max_bytes: int) -> int:
        """
        Copy the stream in chunks, failing as soon as more than max_bytes
        have been read. Returns the number of bytes written.
        """
        chunk_size = self.storage.chunk_size
        async with aiofiles.open(self.staging_path, "wb") as out:
            while True:
                chunk = await stream.read(chunk_size)
                if not chunk:
                    break

                self.size += len(chunk)
                if self.size > max_bytes:
                    raise PayloadTooLarge(
                        "File too large.",
                        detail=f"Maximum size is {max_bytes // (1024 * 1024)}MB",
                    )
                await out.write(chunk)
        return self.size

    def promote(self) -> None:
        """Link the staged bytes under a name no other upload holds"""
        while True:
            try:
                os.link(self.staging_path, self.final_path)
                break
            except FileExistsError:
                logger.warning(f"Upload name {self.name} already taken, picking another")
                self.name = self.storage.next_name(self.suffix)
        self.staging_path.unlink(missing_ok=True)
        self.promoted = True

    def keep(self) -> None:
        self.kept = True

    def discard(self) -> None:
        self.staging_path.unlink(missing_ok=True)
        if self.promoted:
            self.final_path.unlink(missing_ok=True)
            self.promoted = False
            logger.warning(f"Removed orphaned upload {self.final_path}")


class LocalVideoStorage(VideoStorage):
    """
    Upload root on the local filesystem, served under url_prefix.

    The staging directory defaults to a hidden sibling of the root so it is
    never reachable through the static mount and stays on the same
    filesystem for hard links.
    """

    def __init__(self, root: str, url_prefix: str = "/uploads", chunk_size: int = 1024 * 1024,
                 namer: Optional[TimestampNamer] = None, staging_dir: Optional[str] = None):
        self.root = Path(root).resolve()
        if staging_dir:
            self.staging_dir = Path(staging_dir).resolve()
        else:
            self.staging_dir = self.root.parent / f".{self.root.name}-staging"
        self.url_prefix = "/" + url_prefix.strip("/")
        self.chunk_size = chunk_size
        self.namer = namer or TimestampNamer()

    def ensure_dirs(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.staging_dir.mkdir(parents=True, exist_ok=True)

    def next_name(self, suffix: str) -> str:
        return f"{self.namer.next_stamp()}{suffix}"

    def public_path(self, name: str) -> str:
        return f"{self.url_prefix}/{name}"

    @asynccontextmanager
    async def reserve(self, suffix: str) -> AsyncIterator[StagedVideo]:
        self.ensure_dirs()
        staged = StagedVideo(self, suffix)
        try:
            yield staged
        except BaseException:
            if not staged.kept:
                staged.discard()
            raise
        finally:
            staged.staging_path.unlink(missing_ok=True)
