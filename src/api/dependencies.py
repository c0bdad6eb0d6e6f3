"""
Shared FastAPI dependencies for the image effect engine.
Centralizes common dependencies to eliminate code duplication.
"""

import logging

from fastapi import Depends, HTTPException, Request

from services.editor_service import EditorService
from services.script_runner import ScriptRunner

logger = logging.getLogger(__name__)


def get_editor_service(request: Request) -> EditorService:
    """
    Get the editor service from app state.

    Args:
        request: FastAPI request object

    Returns:
        EditorService instance

    Raises:
        HTTPException: If the service is not initialized
    """
    try:
        return request.app.state.editor_service
    except AttributeError as e:
        logger.error(f"Editor service not initialized in app state: {e}")
        raise HTTPException(
            status_code=500, detail="Internal server error: Editor service not initialized"
        )


def get_script_runner(
    request: Request, editor: EditorService = Depends(get_editor_service)
) -> ScriptRunner:
    """Get a ScriptRunner bound to the editor service, with the configured line limit."""
    return ScriptRunner(editor, max_lines=getattr(request.app.state, "max_script_lines", None))


def get_thumbnail_width(request: Request) -> int:
    """Get configured thumbnail width from app state."""
    return getattr(request.app.state, "thumbnail_width", 320)
