"""
Versioned Image Model - Current image, pending effect and undo/redo history
"""

import logging
from collections import deque
from typing import Deque, Dict, Optional

from common.exceptions import IllegalState, InvalidArgument
from core.image.pixel_buffer import PixelBuffer
from effects.base_effect import BaseEffect

logger = logging.getLogger(__name__)


class VersionedImageModel:
    """
    Holds the current image and a linear undo/redo timeline.

    Loading an image or applying an effect pushes the previous state onto
    the undo stack and clears the redo stack. A model that has never been
    loaded is Empty; the Empty state is itself recorded by the first load,
    so undoing past it returns the model to Empty.

    PixelBuffers are immutable, so history entries share the buffers
    instead of copying them.

    Not thread-safe: callers must serialize access.
    """

    def __init__(self, max_history: Optional[int] = None):
        """
        Initialize model

        Args:
            max_history: Maximum undo depth; the oldest entries are evicted
                beyond it. None keeps the full history.
        """
        if max_history is not None and max_history < 1:
            raise InvalidArgument(
                "max_history must be at least 1", details={"max_history": max_history}
            )
        self.max_history = max_history

        self._current: Optional[PixelBuffer] = None
        self._pending_effect: Optional[BaseEffect] = None

        # Most recent entry last; None stands for the Empty state
        self._undo_stack: Deque[Optional[PixelBuffer]] = deque(maxlen=max_history)
        self._redo_stack: Deque[Optional[PixelBuffer]] = deque(maxlen=max_history)

        logger.debug(f"Image model initialized, max_history={max_history}")

    @property
    def is_loaded(self) -> bool:
        return self._current is not None

    @property
    def pending_effect(self) -> Optional[BaseEffect]:
        return self._pending_effect

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def load_image(self, image: PixelBuffer) -> None:
        """
        Replace the current image

        Raises:
            InvalidArgument: If image is None
        """
        if image is None:
            raise InvalidArgument("Image cannot be None")

        self._push_history(self._current)
        self._current = image
        logger.debug(f"Loaded image {image.width}x{image.height}")

    def load_effect(self, effect: BaseEffect) -> None:
        """
        Set the pending effect used by apply_effect()

        Raises:
            InvalidArgument: If effect is None
        """
        if effect is None:
            raise InvalidArgument("Effect cannot be None")

        self._pending_effect = effect
        logger.debug(f"Pending effect set to {effect!r}")

    def apply_effect(self) -> None:
        """
        Apply the pending effect to the current image

        The pending effect stays set so it can be applied again.

        Raises:
            IllegalState: If no image is loaded or no effect is pending
        """
        if self._current is None or self._pending_effect is None:
            raise IllegalState("Image and effect must be loaded before applying effect")

        result = self._pending_effect.apply(self._current)

        # History only changes once the effect has succeeded
        self._push_history(self._current)
        self._current = result
        logger.debug(f"Applied {self._pending_effect!r}")

    def output_image(self) -> PixelBuffer:
        """
        Get the current image

        Raises:
            IllegalState: If no image is loaded
        """
        return self._require_current()

    @property
    def width(self) -> int:
        return self._require_current().width

    @property
    def height(self) -> int:
        return self._require_current().height

    def undo(self) -> bool:
        """
        Step back one state

        Returns:
            False if there is nothing to undo, True otherwise
        """
        if not self._undo_stack:
            return False

        self._redo_stack.append(self._current)
        self._current = self._undo_stack.pop()
        logger.debug(f"Undo: {self.undo_depth} undo / {self.redo_depth} redo left")
        return True

    def redo(self) -> bool:
        """
        Step forward one undone state

        Returns:
            False if there is nothing to redo, True otherwise
        """
        if not self._redo_stack:
            return False

        self._undo_stack.append(self._current)
        self._current = self._redo_stack.pop()
        logger.debug(f"Redo: {self.undo_depth} undo / {self.redo_depth} redo left")
        return True

    def get_stats(self) -> Dict:
        """Get model statistics"""
        return {
            "loaded": self.is_loaded,
            "width": self._current.width if self._current is not None else None,
            "height": self._current.height if self._current is not None else None,
            "pending_effect": self._pending_effect.name if self._pending_effect else None,
            "undo_depth": self.undo_depth,
            "redo_depth": self.redo_depth,
            "max_history": self.max_history,
        }

    def _push_history(self, snapshot: Optional[PixelBuffer]) -> None:
        """Record the pre-change state and start a fresh timeline"""
        if self.max_history is not None and len(self._undo_stack) == self.max_history:
            logger.debug("Undo history full, evicting oldest entry")
        self._undo_stack.append(snapshot)
        self._redo_stack.clear()

    def _require_current(self) -> PixelBuffer:
        if self._current is None:
            raise IllegalState("Image must be loaded before output")
        return self._current
