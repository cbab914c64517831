import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from PIL import Image

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 15


class SegmentMode(Enum):
    BACKGROUND = "background"
    SEED = "seed"
    SHAPE = "shape"
    DETECT = "detect"


@dataclass
class HistoryManager:
    """
    Undo/redo over full image snapshots. Both stacks hold copies, never the
    caller's image, and drop their oldest entry once ``limit`` is reached.
    """
    limit: int = HISTORY_LIMIT

    def __post_init__(self):
        self._undo: deque[Image.Image] = deque(maxlen=self.limit)
        self._redo: deque[Image.Image] = deque(maxlen=self.limit)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def record(self, current: Optional[Image.Image]):
        """Call right before a new edit replaces ``current``."""
        if current is not None:
            self._undo.append(current.copy())
        self._redo.clear()

    def undo(self, current: Optional[Image.Image]) -> Optional[Image.Image]:
        if not self._undo:
            return None
        if current is not None:
            self._redo.append(current.copy())
        logger.debug("Undo (%d left, %d redoable)", len(self._undo) - 1, len(self._redo))
        return self._undo.pop()

    def redo(self, current: Optional[Image.Image]) -> Optional[Image.Image]:
        if not self._redo:
            return None
        if current is not None:
            self._undo.append(current.copy())
        logger.debug("Redo (%d left, %d undoable)", len(self._redo) - 1, len(self._undo))
        return self._redo.pop()

    def clear(self):
        self._undo.clear()
        self._redo.clear()
