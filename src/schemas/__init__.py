"""
Schemas Package

This package contains all Pydantic schemas for request validation and
response serialization, organized by domain.

Note: "schemas" (not "models") follows FastAPI best practices:
- schemas/ = Pydantic models for validation/serialization
"""

# Re-export enums from common package for convenience
from common.enums import DitherMode, EffectType, PatternType

# Base schemas
from .base import BaseRequest

# Common models
from .common import ImageState, Size

# Editor models
from .editor import (
    EditorResponse,
    EffectRequest,
    ImageResponse,
    LoadCheckerboardRequest,
    LoadFileRequest,
    LoadRainbowRequest,
    SaveRequest,
    SaveResponse,
    ScriptRequest,
    ScriptResponse,
)

# System models
from .system import HealthStatus

__all__ = [
    # Enums
    "DitherMode",
    "EffectType",
    "PatternType",
    # Base
    "BaseRequest",
    # Common
    "ImageState",
    "Size",
    # Editor
    "EditorResponse",
    "EffectRequest",
    "ImageResponse",
    "LoadCheckerboardRequest",
    "LoadFileRequest",
    "LoadRainbowRequest",
    "SaveRequest",
    "SaveResponse",
    "ScriptRequest",
    "ScriptResponse",
    # System
    "HealthStatus",
]
