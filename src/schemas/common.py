"""
Common models shared across the API.

This module contains data models used by several routers:
- Size for image dimensions
- ImageState for the editor session snapshot
"""

from typing import Optional

from pydantic import BaseModel, Field


class Size(BaseModel):
    """Image size"""

    width: int
    height: int


class ImageState(BaseModel):
    """Snapshot of the editor session"""

    loaded: bool = Field(..., description="Whether an image is loaded")
    size: Optional[Size] = Field(None, description="Current image size")
    pending_effect: Optional[str] = Field(None, description="Effect applied last")
    undo_depth: int = Field(..., ge=0, description="Available undo steps")
    redo_depth: int = Field(..., ge=0, description="Available redo steps")
    max_history: Optional[int] = Field(None, description="Undo depth limit")

    @classmethod
    def from_stats(cls, stats: dict) -> "ImageState":
        """Create from EditorService.get_state() output."""
        size = None
        if stats.get("loaded"):
            size = Size(width=stats["width"], height=stats["height"])
        return cls(
            loaded=stats["loaded"],
            size=size,
            pending_effect=stats.get("pending_effect"),
            undo_depth=stats["undo_depth"],
            redo_depth=stats["redo_depth"],
            max_history=stats.get("max_history"),
        )
