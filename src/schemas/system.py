"""
System and monitoring models.

This module contains models for system status:
- Health check
"""

from pydantic import BaseModel


class HealthStatus(BaseModel):
    """Health check result"""

    status: str
    timestamp: str
    image_loaded: bool
