"""
In-process mirror of persisted video metadata
"""

import logging
from typing import List

from clipshare.models.video import VideoRecord

logger = logging.getLogger(__name__)


class VideoCatalog:
    """
    Ordered list of VideoRecord, filled once from the store and appended to
    after each successful upload. Never re-queried, never trimmed.
    """

    def __init__(self):
        self._records: List[VideoRecord] = []

    def load(self, repository) -> None:
        """Replace the contents with a full read of the store; on failure the catalog is left empty"""
        try:
            records = repository.load_all()
        except Exception as e:
            logger.error(f"Error loading video catalog: {e}")
            self._records = []
            return

        self._records = list(records)
        logger.info(f"Loaded {len(self._records)} videos into catalog")

    def list_all(self) -> List[VideoRecord]:
        return list(self._records)

    def append(self, record: VideoRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)
