"""
Snapshot-based undo/redo history.

Wraps a GraphStore. The caller pushes before every mutation, which records
the pre-mutation snapshot. The first undo after a push also records the
current state so that redo can return to it.
"""

import logging
from typing import List

from .constants import HISTORY_CAPACITY
from .graph import GraphStore
from .models import GraphSnapshot

logger = logging.getLogger(__name__)


class EditHistory:
    """
    Bounded linear undo history over a graph store.

    Attributes:
        store: The graph store snapshots are taken from and restored into
        capacity: Maximum number of snapshots kept from pushes
        cursor: Index of the snapshot the next undo restores (-1 when empty)
    """

    def __init__(self, store: GraphStore, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.store = store
        self.capacity = capacity
        self.cursor = -1
        self._entries: List[GraphSnapshot] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return self.cursor >= 0

    @property
    def can_redo(self) -> bool:
        # The first undo appends the current state, hence -2
        return self.cursor < len(self._entries) - 2

    def push(self) -> None:
        """
        Record the store state before a mutation.

        Any redo entries beyond the cursor are discarded. When the history is
        full the oldest snapshot is dropped.
        """
        self._entries = self._entries[: self.cursor + 1]
        self._entries.append(self.store.get_snapshot())
        if len(self._entries) > self.capacity:
            self._entries.pop(0)
        self.cursor = min(self.cursor + 1, self.capacity - 1)

    def undo(self) -> bool:
        """
        Restore the state before the last change.

        Returns:
            True if the store was restored, False if there was nothing to undo
        """
        if not self.can_undo:
            return False

        if self.cursor == len(self._entries) - 1:
            self._entries.append(self.store.get_snapshot())

        self.store.restore(self._entries[self.cursor])
        self.cursor -= 1
        logger.debug("Undo, cursor now %d of %d", self.cursor, len(self._entries))
        return True

    def redo(self) -> bool:
        """
        Re-apply the last undone change.

        Returns:
            True if the store was restored, False if there was nothing to redo
        """
        if not self.can_redo:
            return False

        self.store.restore(self._entries[self.cursor + 2])
        self.cursor += 1
        logger.debug("Redo, cursor now %d of %d", self.cursor, len(self._entries))
        return True

    def clear(self) -> None:
        """Forget every snapshot."""
        self._entries = []
        self.cursor = -1
