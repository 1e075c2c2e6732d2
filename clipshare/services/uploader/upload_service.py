import asyncio
import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from clipshare.core.errors import MissingFields, PayloadTooLarge
from clipshare.models.video import VideoRecord
from clipshare.services.catalog import VideoCatalog
from clipshare.services.uploader.interfaces import VideoRepository, VideoStorage
from clipshare.services.uploader.media import check_video_type

logger = logging.getLogger(__name__)

MISSING_UPLOAD_FIELDS = "Please provide all fields and a video file."


class VideoUploadService:
    """Validates, stores and records one uploaded video"""

    def __init__(self,
                 storage: VideoStorage,
                 repository: VideoRepository,
                 catalog: VideoCatalog,
                 max_upload_bytes: int = 200 * 1024 * 1024):
        self.storage = storage
        self.repository = repository
        self.catalog = catalog
        self.max_upload_bytes = max_upload_bytes

    async def accept_upload(self,
                            stream,
                            filename: Optional[str],
                            content_type: Optional[str],
                            title: Optional[str],
                            description: Optional[str],
                            tags: Optional[str],
                            size: Optional[int] = None) -> VideoRecord:
        """
        Main workflow execution.

        The file is staged, promoted and only kept if the metadata row is
        inserted; any failure along the way removes it again.
        """
        has_file = stream is not None and bool(filename)

        extension = check_video_type(filename, content_type) if has_file else ""

        if not (title and description and tags and has_file):
            logger.info("Upload rejected: missing fields")
            raise MissingFields(MISSING_UPLOAD_FIELDS)

        if size is not None and size > self.max_upload_bytes:
            logger.info(f"Upload rejected: declared size {size} over limit")
            raise PayloadTooLarge("File too large.",
                                  detail=f"Maximum size is {self.max_upload_bytes // (1024 * 1024)}MB")

        async with self.storage.reserve(extension) as staged:
            written = await staged.write_from(stream, self.max_upload_bytes)
            if written == 0:
                raise MissingFields(MISSING_UPLOAD_FIELDS, detail="Empty file received")

            staged.promote()
            insert = asyncio.ensure_future(run_in_threadpool(
                self.repository.add, title, description, tags, staged.video_path
            ))
            try:
                record = await asyncio.shield(insert)
            except asyncio.CancelledError:
                # The worker thread cannot be stopped; keep the file only if its row was written
                await asyncio.wait([insert])
                if insert.exception() is None:
                    staged.keep()
                    self.catalog.append(insert.result())
                    logger.info(f"Upload {staged.video_path} was cancelled after its row was written")
                raise
            staged.keep()

        self.catalog.append(record)
        logger.info(f"Stored upload {record.video_path} ({written} bytes) as video {record.id}")
        return record
