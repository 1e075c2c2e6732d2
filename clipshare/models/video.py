"""
Video model and the in-memory record served by the catalog
"""

from dataclasses import dataclass
from typing import Any, Dict

from sqlalchemy import Column, String, Text

from clipshare.models.base import BaseModel


class Video(BaseModel):
    __tablename__ = "videos"

    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    tags = Column(Text, nullable=False)
    video_path = Column(String(512), nullable=False)


@dataclass(frozen=True)
class VideoRecord:
    """One catalog entry, built the same way whether loaded or just uploaded"""
    id: int
    title: str
    description: str
    tags: str
    video_path: str

    @classmethod
    def from_row(cls, row: Video) -> "VideoRecord":
        return cls(
            id=int(row.id),
            title=str(row.title),
            description=str(row.description),
            tags=str(row.tags),
            video_path=str(row.video_path),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "tags": self.tags,
            "videoPath": self.video_path,
        }
