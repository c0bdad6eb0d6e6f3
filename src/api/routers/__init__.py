"""
API Routers for the image effect engine
"""

from . import editor, system

__all__ = ["editor", "system"]
