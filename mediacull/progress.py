from dataclasses import dataclass
from typing import Optional
from datetime import datetime


@dataclass
class DeletionProgress:
    """Tracks progress of a deletion batch."""
    is_running: bool = False
    processed_count: int = 0
    failed_count: int = 0
    total_count: int = 0
    bytes_reclaimed: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def start(self, total: int):
        self.is_running = True
        self.processed_count = 0
        self.failed_count = 0
        self.total_count = total
        self.bytes_reclaimed = 0
        self.started_at = datetime.now()
        self.finished_at = None

    def update(self, success: bool, size_bytes: int = 0):
        if success:
            self.processed_count += 1
            self.bytes_reclaimed += size_bytes
        else:
            self.failed_count += 1

    def finish(self):
        self.is_running = False
        self.finished_at = datetime.now()

    def elapsed_seconds(self) -> float:
        """Seconds between start and finish, or up to now while running."""
        if self.started_at is None:
            return 0.0
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()
