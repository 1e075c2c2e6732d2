from abc import ABC, abstractmethod
from typing import List

from clipshare.models.video import VideoRecord


class VideoStorage(ABC):
    """Abstract storage for uploaded video bytes"""
    @abstractmethod
    def reserve(self, suffix: str):
        """Async context manager yielding a staged upload, removed again on a failed exit unless kept"""
        pass


class VideoRepository(ABC):
    """Abstract persistence for video metadata"""
    @abstractmethod
    def add(self, title: str, description: str, tags: str, video_path: str) -> VideoRecord:
        pass

    @abstractmethod
    def load_all(self) -> List[VideoRecord]:
        pass
