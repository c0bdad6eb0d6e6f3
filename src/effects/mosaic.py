"""
Seed-clustering mosaic ("stained glass") effect.

Random seed points are drawn inside the image, every pixel joins the cluster
of its nearest seed, and each cluster is painted with its mean color.

The nearest-seed scan is O(seeds x pixels). It is split into row ranges that
run on a thread pool; each range returns its own per-cluster sums and counts,
which are merged once every range has finished. Within a range, distances are
evaluated in tiles of at most block_size elements, splitting the seed list too
when it alone is larger than one tile.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from common.constants import EffectConstants, ImageConstants
from common.exceptions import InvalidSeedCount
from core.image.pixel_buffer import PixelBuffer
from effects.base_effect import BaseEffect


class MosaicClusterer(BaseEffect):
    """Mosaic effect with a fixed requested number of seeds."""

    def __init__(
        self,
        seeds: int,
        rng_seed: Optional[int] = None,
        workers: int = EffectConstants.MOSAIC_WORKERS,
        block_size: int = EffectConstants.MOSAIC_BLOCK_SIZE,
    ):
        """
        Initialize mosaic.

        Args:
            seeds: Requested number of seeds, 1-15000
            rng_seed: Seed for the random generator; None draws fresh
                seeds on every apply
            workers: Threads used for the nearest-seed scan
            block_size: Distance-matrix elements evaluated per step

        Raises:
            InvalidSeedCount: If seeds is outside the allowed range
        """
        super().__init__()
        if not EffectConstants.MIN_SEEDS <= seeds <= EffectConstants.MAX_SEEDS:
            raise InvalidSeedCount(seeds, EffectConstants.MIN_SEEDS, EffectConstants.MAX_SEEDS)
        self.seeds = int(seeds)
        self.rng_seed = rng_seed
        self.workers = max(1, int(workers))
        self.block_size = max(1, int(block_size))

    def draw_seeds(self, width: int, height: int) -> np.ndarray:
        """
        Draw seed coordinates uniformly from the image bounds.

        Duplicate draws are dropped, so fewer than the requested number of
        seeds may come back. Seeds keep the order in which they were first
        drawn; that order breaks distance ties.

        Returns:
            Integer array of shape (k, 2) holding (x, y) pairs
        """
        rng = np.random.default_rng(self.rng_seed)
        xs = rng.integers(0, width, size=self.seeds)
        ys = rng.integers(0, height, size=self.seeds)
        unique = list(dict.fromkeys(zip(xs.tolist(), ys.tolist())))
        return np.array(unique, dtype=np.int64)

    def _tile_shape(self, width: int, k: int) -> Tuple[int, int, int]:
        """
        Pick (rows, columns, seeds) per step so that one distance block
        holds at most block_size elements.
        """
        seeds_per_step = min(k, self.block_size)
        pixels_per_step = max(1, self.block_size // seeds_per_step)
        if pixels_per_step >= width:
            return pixels_per_step // width, width, seeds_per_step
        return 1, pixels_per_step, seeds_per_step

    def _nearest(
        self, xs: np.ndarray, ys: np.ndarray, seed_xy: np.ndarray, seeds_per_step: int
    ) -> np.ndarray:
        """
        Index of the nearest seed for every pixel of a rows x columns tile.

        Seeds are visited in chunks; a later chunk only wins on a strictly
        smaller distance, so ties keep the lowest seed index.
        """
        best_dist = None
        best_label = None
        for s0 in range(0, len(seed_xy), seeds_per_step):
            chunk = seed_xy[s0 : s0 + seeds_per_step]
            dx = xs[np.newaxis, :, np.newaxis] - chunk[np.newaxis, np.newaxis, :, 0]
            dy = ys[:, np.newaxis, np.newaxis] - chunk[np.newaxis, np.newaxis, :, 1]
            # Squared distance preserves the ordering; argmin keeps the first seed on ties
            dist = dx * dx + dy * dy
            label = np.argmin(dist, axis=2)
            nearest = np.take_along_axis(dist, label[:, :, np.newaxis], axis=2)[:, :, 0]
            if best_dist is None:
                best_dist, best_label = nearest, label
            else:
                closer = nearest < best_dist
                best_dist = np.where(closer, nearest, best_dist)
                best_label = np.where(closer, label + s0, best_label)
        return best_label

    def _scan_rows(
        self, pixels: np.ndarray, seed_xy: np.ndarray, y_start: int, y_end: int
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Assign rows [y_start, y_end) to their nearest seeds.

        Returns:
            Tuple of (labels for the rows, per-cluster channel sums,
            per-cluster pixel counts)
        """
        width = pixels.shape[1]
        k = len(seed_xy)
        rows_per_step, cols_per_step, seeds_per_step = self._tile_shape(width, k)

        labels = np.empty((y_end - y_start, width), dtype=np.int64)
        for y0 in range(y_start, y_end, rows_per_step):
            y1 = min(y0 + rows_per_step, y_end)
            ys = np.arange(y0, y1, dtype=np.int64)
            for x0 in range(0, width, cols_per_step):
                x1 = min(x0 + cols_per_step, width)
                xs = np.arange(x0, x1, dtype=np.int64)
                labels[y0 - y_start : y1 - y_start, x0:x1] = self._nearest(
                    xs, ys, seed_xy, seeds_per_step
                )

        flat_labels = labels.ravel()
        block = pixels[y_start:y_end].reshape(-1, ImageConstants.NUM_CHANNELS)
        counts = np.bincount(flat_labels, minlength=k)
        sums = np.zeros((k, ImageConstants.NUM_CHANNELS), dtype=np.int64)
        for c in range(ImageConstants.NUM_CHANNELS):
            sums[:, c] = np.bincount(flat_labels, weights=block[:, c], minlength=k).astype(
                np.int64
            )

        return labels, sums, counts

    def _partitions(self, height: int) -> List[Tuple[int, int]]:
        """Split [0, height) into contiguous row ranges, one per worker."""
        parts = min(self.workers, height)
        bounds = np.linspace(0, height, parts + 1).astype(int)
        return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]

    def apply(self, image: PixelBuffer) -> PixelBuffer:
        h, w = image.height, image.width
        pixels = image.array.astype(np.int64)
        seed_xy = self.draw_seeds(w, h)
        k = len(seed_xy)

        ranges = self._partitions(h)
        if len(ranges) == 1:
            results = [self._scan_rows(pixels, seed_xy, *ranges[0])]
        else:
            with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
                futures = [
                    executor.submit(self._scan_rows, pixels, seed_xy, start, end)
                    for start, end in ranges
                ]
                results = [future.result() for future in futures]

        # Merge per-partition accumulators
        labels = np.concatenate([r[0] for r in results], axis=0)
        sums = np.sum([r[1] for r in results], axis=0)
        counts = np.sum([r[2] for r in results], axis=0)

        means = sums // np.maximum(counts, 1)[:, np.newaxis]
        output = means[labels]

        self.logger.debug(
            f"Mosaic: {k} clusters ({self.seeds} requested) over {w}x{h} image "
            f"using {len(ranges)} partition(s)"
        )
        return PixelBuffer(output)

    def __repr__(self) -> str:
        return f"{self.name}(seeds={self.seeds})"
