"""
System API Router - Health and configuration
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_editor_service
from api.exceptions import safe_endpoint
from schemas import HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(editor=Depends(get_editor_service)) -> HealthStatus:
    """Simple health check"""
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        image_loaded=editor.get_state()["loaded"],
    )


@router.get("/config")
@safe_endpoint
async def get_config(request: Request) -> dict:
    """Get current configuration"""
    return request.app.state.config
