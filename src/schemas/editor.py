"""
Editor API models.

This module contains models for editor operations:
- Loading images from files or generators
- Applying effects
- Saving, exporting and running scripts
"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from common.constants import EffectConstants
from common.enums import EffectType

from .base import BaseRequest
from .common import ImageState


class LoadFileRequest(BaseRequest):
    """Request to load an image file"""

    file_path: str = Field(..., min_length=1, description="Image file (PNG, JPG, BMP, ...)")


class LoadRainbowRequest(BaseRequest):
    """Request to load a generated stripe pattern"""

    width: int = Field(..., gt=0, description="Image width in pixels")
    height: int = Field(..., gt=0, description="Image height in pixels")
    horizontal: bool = Field(True, description="Horizontal (True) or vertical stripes")


class LoadCheckerboardRequest(BaseRequest):
    """Request to load a generated checkerboard"""

    tile_size: int = Field(..., gt=0, description="Tile side length in pixels")


class EffectRequest(BaseRequest):
    """Request to apply a named effect"""

    effect: EffectType = Field(..., description="Effect to apply")
    seeds: Optional[int] = Field(
        None,
        ge=EffectConstants.MIN_SEEDS,
        le=EffectConstants.MAX_SEEDS,
        description="Seed count (mosaic only)",
    )
    rng_seed: Optional[int] = Field(None, description="Random seed for reproducible mosaics")

    @model_validator(mode="after")
    def check_seeds(self):
        """Mosaic needs a seed count."""
        if self.effect == EffectType.MOSAIC and self.seeds is None:
            raise ValueError("mosaic requires 'seeds'")
        return self


class SaveRequest(BaseRequest):
    """Request to save the current image"""

    file_path: str = Field(..., min_length=1, description="Destination file; extension sets format")


class ScriptRequest(BaseRequest):
    """Request to run a command script"""

    script: str = Field(..., description="Script text, one command per line")


class EditorResponse(BaseModel):
    """Response for state-changing editor operations"""

    success: bool = True
    message: str = ""
    state: ImageState
    thumbnail_base64: Optional[str] = Field(None, description="PNG preview of the result")
    processing_time_ms: int = 0


class ImageResponse(BaseModel):
    """Full current image as base64"""

    width: int
    height: int
    format: str = "png"
    image_base64: str


class SaveResponse(BaseModel):
    """Response for save"""

    success: bool = True
    file_path: str


class ScriptResponse(BaseModel):
    """Response for script execution"""

    success: bool = True
    commands_executed: int
    state: ImageState
