"""
Exception hierarchy for the image effect engine.

Every engine error carries a message, an HTTP-style status code and a
details dictionary so the API layer can render it without a lookup table.

IMPORTANT: This module must NOT import from any other project packages.
"""

from typing import Dict, Optional


class ImageEngineError(Exception):
    """Base exception for the image effect engine."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidArgument(ImageEngineError, ValueError):
    """Raised when a required input is absent or unusable."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message=message, status_code=400, details=details)


class InvalidDimensions(InvalidArgument):
    """Raised when a pixel grid is empty, ragged or has the wrong channel count."""


class InvalidKernel(InvalidArgument):
    """Raised when a convolution kernel is empty, even-sized or ragged."""


class InvalidMatrix(InvalidArgument):
    """Raised when a color matrix is not 3x3."""


class InvalidSeedCount(InvalidArgument):
    """Raised when a mosaic seed count is outside the allowed range."""

    def __init__(self, seeds: int, minimum: int, maximum: int):
        super().__init__(
            message=f"Seed count must be between {minimum} and {maximum}, got {seeds}",
            details={"seeds": seeds, "min": minimum, "max": maximum},
        )


class OutOfBounds(ImageEngineError, IndexError):
    """Raised when a pixel coordinate lies outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            message=f"Location ({x}, {y}) out of bounds for {width}x{height} image",
            status_code=404,
            details={"x": x, "y": y, "width": width, "height": height},
        )


class IllegalState(ImageEngineError, RuntimeError):
    """Raised when an operation is invoked in a state that forbids it."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message=message, status_code=409, details=details)


class ImageIOError(ImageEngineError):
    """Raised when an image cannot be decoded or encoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Image I/O failed for {path}: {reason}",
            status_code=500,
            details={"path": path, "reason": reason},
        )


class ScriptError(ImageEngineError):
    """Raised when a command script line cannot be executed."""

    def __init__(self, line_number: int, line: str, reason: str):
        super().__init__(
            message=f"Script error on line {line_number}: {reason}",
            status_code=422,
            details={"line_number": line_number, "line": line, "reason": reason},
        )


class BudgetExceeded(ImageEngineError):
    """Raised when a request exceeds the configured compute budget."""

    def __init__(self, operation: str, work: int, budget: int):
        super().__init__(
            message=f"{operation} rejected: work {work} exceeds budget {budget}",
            status_code=413,
            details={"operation": operation, "work": work, "budget": budget},
        )
