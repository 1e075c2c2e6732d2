"""
SQL persistence for video metadata
"""

from typing import List

from sqlalchemy.orm import sessionmaker

from clipshare.core.database import session_scope
from clipshare.models.video import Video, VideoRecord
from clipshare.services.uploader.interfaces import VideoRepository


class SqlVideoRepository(VideoRepository):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def add(self, title: str, description: str, tags: str, video_path: str) -> VideoRecord:
        with session_scope(self.session_factory) as db:
            row = Video(title=title, description=description, tags=tags, video_path=video_path)
            db.add(row)
            db.flush()
            record = VideoRecord.from_row(row)
        return record

    def load_all(self) -> List[VideoRecord]:
        # Natural store order, no sorting
        with session_scope(self.session_factory) as db:
            return [VideoRecord.from_row(row) for row in db.query(Video).all()]
