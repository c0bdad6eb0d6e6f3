"""
Image effects - a closed set of four effect classes.

- ConvolutionFilter: kernel convolution (presets BLUR, SHARPEN)
- ColorTransform: 3x3 color matrix (presets GREYSCALE, SEPIA)
- Ditherer: error-diffusion black/white dithering
- MosaicClusterer: nearest-seed clustering with cluster-mean fill

create_effect() maps an EffectType name plus parameters to an instance.
"""

from typing import Optional

from common.constants import EffectConstants
from common.enums import DitherMode, EffectType
from common.exceptions import InvalidArgument
from effects.base_effect import BaseEffect
from effects.color_transform import ColorTransform
from effects.convolution import ConvolutionFilter
from effects.dither import Ditherer
from effects.mosaic import MosaicClusterer
from effects.presets import BLUR, GREYSCALE, SEPIA, SHARPEN


def create_effect(
    effect_type,
    seeds: Optional[int] = None,
    rng_seed: Optional[int] = None,
    dither_mode: DitherMode = DitherMode.TRUNCATE,
    workers: int = EffectConstants.MOSAIC_WORKERS,
    block_size: int = EffectConstants.MOSAIC_BLOCK_SIZE,
) -> BaseEffect:
    """
    Build an effect from its name.

    Args:
        effect_type: EffectType or its string value (case-insensitive)
        seeds: Seed count, required for mosaic
        rng_seed: Optional random seed for mosaic
        dither_mode: Quantizer for dither
        workers: Mosaic scan threads
        block_size: Mosaic distance-matrix elements per step

    Returns:
        Effect instance

    Raises:
        InvalidArgument: If the name is unknown or mosaic has no seed count
        InvalidSeedCount: If the mosaic seed count is out of range
    """
    parsed = EffectType.parse(effect_type)
    if parsed is None:
        raise InvalidArgument(f"Unknown effect: {effect_type}", details={"effect": effect_type})

    if parsed == EffectType.BLUR:
        return BLUR
    if parsed == EffectType.SHARPEN:
        return SHARPEN
    if parsed == EffectType.GREYSCALE:
        return GREYSCALE
    if parsed == EffectType.SEPIA:
        return SEPIA
    if parsed == EffectType.DITHER:
        return Ditherer(mode=dither_mode)

    if seeds is None:
        raise InvalidArgument("Mosaic requires a seed count")
    return MosaicClusterer(seeds, rng_seed=rng_seed, workers=workers, block_size=block_size)


__all__ = [
    "BaseEffect",
    "ColorTransform",
    "ConvolutionFilter",
    "Ditherer",
    "MosaicClusterer",
    "BLUR",
    "SHARPEN",
    "GREYSCALE",
    "SEPIA",
    "create_effect",
]
