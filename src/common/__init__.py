"""
Common package - fundamental types without project dependencies.

This package contains basic types used throughout the system:
- Enums (EffectType, DitherMode, PatternType)
- Constants (ImageConstants, EffectConstants, ...)
- Exceptions (ImageEngineError hierarchy)

IMPORTANT: This package must NOT import from any other project packages
(core, effects, services, schemas, api) to avoid circular dependencies.
"""

# Export all constants
from common.constants import (
    APIConstants,
    Colors,
    EffectConstants,
    GeneratorConstants,
    ImageConstants,
    SystemConstants,
)

# Export all enums
from common.enums import DitherMode, EffectType, PatternType

# Export exceptions
from common.exceptions import (
    BudgetExceeded,
    IllegalState,
    ImageEngineError,
    ImageIOError,
    InvalidArgument,
    InvalidDimensions,
    InvalidKernel,
    InvalidMatrix,
    InvalidSeedCount,
    OutOfBounds,
    ScriptError,
)

__all__ = [
    # Enums
    "DitherMode",
    "EffectType",
    "PatternType",
    # Constants
    "APIConstants",
    "Colors",
    "EffectConstants",
    "GeneratorConstants",
    "ImageConstants",
    "SystemConstants",
    # Exceptions
    "BudgetExceeded",
    "IllegalState",
    "ImageEngineError",
    "ImageIOError",
    "InvalidArgument",
    "InvalidDimensions",
    "InvalidKernel",
    "InvalidMatrix",
    "InvalidSeedCount",
    "OutOfBounds",
    "ScriptError",
]
