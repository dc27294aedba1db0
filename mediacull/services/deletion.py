"""Confirming and deleting a selection of media items."""

import sys
from typing import Callable, Optional, Sequence
import logging

from rich.console import Console

from mediacull.errors import MediaCullError
from mediacull.models import MediaItem
from mediacull.progress import DeletionProgress
from mediacull.services.backends import Backends

logger = logging.getLogger(__name__)


def check_selection(items: Sequence[MediaItem], selected: Sequence[int]) -> None:
    """Raise if any selected index does not point at a listed item."""
    for index in selected:
        if not 0 <= index < len(items):
            raise MediaCullError(
                f"Selected index {index} is not one of the {len(items)} listed items"
            )


class DeletionOrchestrator:
    """Removes selected items from the working list and from their library.
    
    Deletion is fail-fast: the first failing backend call stops the batch and
    its error propagates. Items removed from the list before the failure are
    not put back.
    """
    
    def __init__(
        self,
        backends: Backends,
        console: Optional[Console] = None,
        read_line: Optional[Callable[[], str]] = None,
        progress: Optional[DeletionProgress] = None
    ):
        self.backends = backends
        self.console = console or Console()
        self.read_line = read_line or sys.stdin.readline
        self.progress = progress or DeletionProgress()
    
    def confirm(self, items: Sequence[MediaItem], selected: Sequence[int]) -> bool:
        """List the selection and ask the operator for a yes/no answer."""
        self.console.print("Are you sure you want to delete the following items (y/n):")
        for index in selected:
            if 0 <= index < len(items):
                self.console.print(f"- {items[index].summary()}", markup=False)
            else:
                self.console.print("- Unknown item")
        
        answer = self.read_line().strip().lower()
        return answer.startswith("y")
    
    async def delete_item(self, item: MediaItem) -> None:
        library = self.backends.library(item.media_type, item.is_4k)
        if library is None:
            raise MediaCullError(f"No library configured for {item.summary()}")
        logger.info(f"Deleting {item.summary()} from {library.service} (id {item.external_id})")
        await library.delete_item(item.external_id)
    
    async def delete_selected(self, items: list[MediaItem], selected: Sequence[int]) -> list[MediaItem]:
        """Delete the selected items, highest index first.
        
        Popping from the end keeps every lower index that is still to be
        processed pointing at the same item.
        """
        check_selection(items, selected)
        removed = []
        indices = sorted(set(selected), reverse=True)
        self.progress.start(len(indices))
        try:
            for index in indices:
                item = items.pop(index)
                try:
                    await self.delete_item(item)
                except Exception:
                    self.progress.update(success=False)
                    logger.error(f"Deleting {item.summary()} failed, stopping")
                    raise
                self.progress.update(success=True, size_bytes=item.size or 0)
                removed.append(item)
        finally:
            self.progress.finish()
        return removed
    
    async def confirm_and_delete(self, items: list[MediaItem], selected: Sequence[int]) -> list[MediaItem]:
        """Ask for confirmation, then delete. Returns the deleted items."""
        if not selected:
            return []
        check_selection(items, selected)
        if not self.confirm(items, selected):
            self.console.print("Cancelling...")
            return []
        return await self.delete_selected(items, selected)
