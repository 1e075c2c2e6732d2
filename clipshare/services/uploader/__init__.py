"""
Uploader Service Package

Stores uploaded video files and records their metadata.

Key Components:
- VideoStorage: Abstract base class for where uploaded bytes go
- VideoRepository: Abstract base class for metadata persistence
- LocalVideoStorage: Filesystem implementation with staged writes
- SqlVideoRepository: SQLAlchemy implementation
- VideoUploadService: Main orchestration service
"""

from .interfaces import VideoStorage, VideoRepository
from .local_storage import LocalVideoStorage, StagedVideo, TimestampNamer
from .repository import SqlVideoRepository
from .upload_service import VideoUploadService

__all__ = [
    # Interfaces
    'VideoStorage',
    'VideoRepository',

    # Implementations
    'LocalVideoStorage',
    'StagedVideo',
    'TimestampNamer',
    'SqlVideoRepository',

    # Services
    'VideoUploadService',
]
