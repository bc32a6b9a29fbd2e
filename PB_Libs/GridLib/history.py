"""
Linear undo/redo history for PixelBead.

Every entry is a full copy of the grid. Snapshots are copied on the way in
and on the way out, so no caller can alias a stored entry.

Classes:
    HistoryLog: Snapshot list with a cursor
"""

import logging
from typing import List, Optional

from PB_Libs.GridLib.grid_models import Grid

logger = logging.getLogger(__name__)


class HistoryLog:
    """
    Ordered grid snapshots with a cursor pointing at the live state.

    Invariant: 0 <= cursor < len(snapshots). Committing after an undo drops
    every entry past the cursor.

    Example:
        >>> history = HistoryLog()
        >>> history.commit({(0, 0): "red"})
        True
        >>> history.undo()
        {}
        >>> history.redo()
        {(0, 0): 'red'}
    """

    def __init__(self, initial: Optional[Grid] = None):
        self._snapshots: List[Grid] = [dict(initial or {})]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> Grid:
        return dict(self._snapshots[self._cursor])

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def commit(self, grid: Grid) -> bool:
        """
        Record a finished edit.

        Returns:
            False if the grid equals the snapshot at the cursor (nothing recorded)
        """
        if grid == self._snapshots[self._cursor]:
            return False

        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(dict(grid))
        self._cursor = len(self._snapshots) - 1
        logger.debug(f"History commit #{self._cursor} ({len(grid)} cells)")
        return True

    def undo(self) -> Optional[Grid]:
        if not self.can_undo:
            return None
        self._cursor -= 1
        return dict(self._snapshots[self._cursor])

    def redo(self) -> Optional[Grid]:
        if not self.can_redo:
            return None
        self._cursor += 1
        return dict(self._snapshots[self._cursor])

    def reset(self, grid: Optional[Grid] = None) -> None:
        """Drop all entries and start over from `grid`."""
        self._snapshots = [dict(grid or {})]
        self._cursor = 0
