"""
Editor Service - Business logic for editing a single image session.

This service sits between the front ends (HTTP API, script runner) and the
versioned image model. It turns named requests into effects and generators,
checks compute budgets, and serializes every model call behind one lock.
"""

import logging
import time
from threading import Lock
from typing import Dict, Optional, Tuple

from common.constants import EffectConstants
from common.enums import DitherMode, EffectType
from common.exceptions import BudgetExceeded, IllegalState, InvalidArgument
from core.image import create_checkerboard, create_stripe_pattern, create_thumbnail
from core.image.pixel_buffer import PixelBuffer
from core.image_model import VersionedImageModel
from core.image_store import ImageStore
from effects import BaseEffect, create_effect

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class EditorService:
    """
    Service for loading, editing, saving and stepping through image history.

    This service provides high-level editor operations for the API layer
    and the script runner.
    """

    def __init__(
        self,
        model: VersionedImageModel,
        store: ImageStore,
        mosaic_workers: int = EffectConstants.MOSAIC_WORKERS,
        mosaic_block_size: int = EffectConstants.MOSAIC_BLOCK_SIZE,
        max_mosaic_work: int = EffectConstants.MAX_MOSAIC_WORK,
        dither_mode: DitherMode = DitherMode.TRUNCATE,
    ):
        """
        Initialize editor service.

        Args:
            model: Image model holding the session state
            store: File store used by load_file / save
            mosaic_workers: Threads for the mosaic scan
            mosaic_block_size: Mosaic distance-matrix elements per step
            max_mosaic_work: pixels x seeds budget for one mosaic
            dither_mode: Quantizer used by dither
        """
        self.model = model
        self.store = store
        self.mosaic_workers = mosaic_workers
        self.mosaic_block_size = mosaic_block_size
        self.max_mosaic_work = max_mosaic_work
        self.dither_mode = DitherMode(dither_mode)

        # The model itself is single-caller
        self.lock = Lock()

    @classmethod
    def from_settings(cls, settings) -> "EditorService":
        """Build a service from application Settings."""
        return cls(
            model=VersionedImageModel(max_history=settings.engine.max_history),
            store=ImageStore(
                settings.storage.base_directory,
                default_format=settings.storage.default_format,
                allowed_formats=settings.storage.allowed_formats,
            ),
            mosaic_workers=settings.engine.mosaic_workers,
            mosaic_block_size=settings.engine.mosaic_block_size,
            max_mosaic_work=settings.engine.max_mosaic_work,
            dither_mode=settings.engine.dither_mode,
        )

    # Loading

    def load_image(self, image: PixelBuffer) -> None:
        """Load an already-decoded buffer."""
        with self.lock:
            self.model.load_image(image)
        logger.info(f"Loaded image {image.width}x{image.height}")

    def load_file(self, filename: str) -> int:
        """
        Load an image file through the store.

        The model is only touched after a successful decode, so a failed
        load leaves the session unchanged.

        Returns:
            Load time in milliseconds

        Raises:
            InvalidArgument: If filename is empty
            FileNotFoundError: If the file does not exist
            ImageIOError: If the file cannot be decoded
        """
        if filename is None:
            raise InvalidArgument("File name cannot be None")

        start = time.perf_counter()
        image = self.store.read(filename)
        with self.lock:
            self.model.load_image(image)
        logger.info(f"Loaded {filename} ({image.width}x{image.height})")
        return _elapsed_ms(start)

    def load_rainbow(self, width: int, height: int, horizontal: bool = True) -> int:
        """Load a generated seven-band stripe pattern; returns the time taken in ms."""
        start = time.perf_counter()
        image = create_stripe_pattern(width, height, horizontal)
        with self.lock:
            self.model.load_image(image)
        logger.info(f"Loaded rainbow {width}x{height} (horizontal={horizontal})")
        return _elapsed_ms(start)

    def load_checkerboard(self, tile_size: int) -> int:
        """Load a generated 8x8-tile checkerboard; returns the time taken in ms."""
        start = time.perf_counter()
        image = create_checkerboard(tile_size)
        with self.lock:
            self.model.load_image(image)
        logger.info(f"Loaded checkerboard with tile size {tile_size}")
        return _elapsed_ms(start)

    # Saving

    def save(self, filename: str) -> str:
        """
        Save the current image.

        Returns:
            Path written

        Raises:
            IllegalState: If no image is loaded
            ImageIOError: If the file cannot be written
        """
        if filename is None:
            raise InvalidArgument("File name cannot be None")

        with self.lock:
            image = self.model.output_image()
        path = self.store.write(image, filename)
        logger.info(f"Saved image to {path}")
        return str(path)

    # Effects

    def build_effect(
        self, effect_type, seeds: Optional[int] = None, rng_seed: Optional[int] = None
    ) -> BaseEffect:
        """
        Create an effect configured with this service's engine settings.

        Raises:
            InvalidArgument: If the effect name is unknown
            InvalidSeedCount: If the mosaic seed count is out of range
        """
        return create_effect(
            effect_type,
            seeds=seeds,
            rng_seed=rng_seed,
            dither_mode=self.dither_mode,
            workers=self.mosaic_workers,
            block_size=self.mosaic_block_size,
        )

    def apply(self, effect: BaseEffect) -> int:
        """
        Set an effect as pending and apply it.

        Returns:
            Processing time in milliseconds

        Raises:
            IllegalState: If no image is loaded
        """
        with self.lock:
            self.model.load_effect(effect)
            start = time.perf_counter()
            self.model.apply_effect()
            ms = _elapsed_ms(start)
        logger.info(f"Applied {effect!r} in {ms}ms")
        return ms

    def apply_named(
        self, effect_type, seeds: Optional[int] = None, rng_seed: Optional[int] = None
    ) -> int:
        """
        Apply an effect by name.

        Mosaic requests are checked against the pixels x seeds budget before
        any work starts.

        Returns:
            Processing time in milliseconds

        Raises:
            BudgetExceeded: If a mosaic would exceed max_mosaic_work
        """
        effect = self.build_effect(effect_type, seeds=seeds, rng_seed=rng_seed)

        if EffectType.parse(effect_type) == EffectType.MOSAIC:
            with self.lock:
                pixels = self.model.width * self.model.height
            work = pixels * effect.seeds
            if work > self.max_mosaic_work:
                raise BudgetExceeded("mosaic", work, self.max_mosaic_work)

        return self.apply(effect)

    def reapply(self) -> int:
        """
        Apply the pending effect again.

        Raises:
            IllegalState: If no effect has been applied yet
        """
        with self.lock:
            start = time.perf_counter()
            self.model.apply_effect()
            return _elapsed_ms(start)

    def blur(self) -> int:
        return self.apply_named(EffectType.BLUR)

    def sharpen(self) -> int:
        return self.apply_named(EffectType.SHARPEN)

    def greyscale(self) -> int:
        return self.apply_named(EffectType.GREYSCALE)

    def sepia(self) -> int:
        return self.apply_named(EffectType.SEPIA)

    def dither(self) -> int:
        return self.apply_named(EffectType.DITHER)

    def mosaic(self, seeds: int, rng_seed: Optional[int] = None) -> int:
        return self.apply_named(EffectType.MOSAIC, seeds=seeds, rng_seed=rng_seed)

    # History

    def undo(self) -> None:
        """
        Step back one state.

        Raises:
            IllegalState: If there is nothing to undo
        """
        with self.lock:
            changed = self.model.undo()
        if not changed:
            raise IllegalState("No changes yet to undo")
        logger.info("Undo")

    def redo(self) -> None:
        """
        Step forward one undone state.

        Raises:
            IllegalState: If there is nothing to redo
        """
        with self.lock:
            changed = self.model.redo()
        if not changed:
            raise IllegalState("No undos yet to restore")
        logger.info("Redo")

    # Output

    def output_image(self) -> PixelBuffer:
        """
        Get the current image.

        Raises:
            IllegalState: If no image is loaded
        """
        with self.lock:
            return self.model.output_image()

    def get_image_with_thumbnail(self, thumbnail_width: int) -> Tuple[PixelBuffer, str]:
        """
        Get the current image and a base64 PNG thumbnail of it.

        Raises:
            IllegalState: If no image is loaded
        """
        image = self.output_image()
        _, thumbnail = create_thumbnail(image, width=thumbnail_width)
        return image, thumbnail

    def get_state(self) -> Dict:
        """Get session state (dimensions, pending effect, history depth)."""
        with self.lock:
            return self.model.get_stats()
