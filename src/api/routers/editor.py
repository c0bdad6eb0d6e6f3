"""
Editor API Router - Load, edit, undo/redo and save the session image
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.dependencies import get_editor_service, get_script_runner, get_thumbnail_width
from api.exceptions import safe_endpoint
from core.image.converters import to_base64
from schemas import (
    EditorResponse,
    EffectRequest,
    ImageResponse,
    ImageState,
    LoadCheckerboardRequest,
    LoadFileRequest,
    LoadRainbowRequest,
    SaveRequest,
    SaveResponse,
    ScriptRequest,
    ScriptResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_response(editor, thumbnail_width: int, message: str, ms: int) -> EditorResponse:
    state = ImageState.from_stats(editor.get_state())
    thumbnail = None
    if state.loaded:
        _, thumbnail = editor.get_image_with_thumbnail(thumbnail_width)
    return EditorResponse(
        message=message, state=state, thumbnail_base64=thumbnail, processing_time_ms=ms
    )


async def _editor_response(
    editor, thumbnail_width: int, message: str, ms: int = 0
) -> EditorResponse:
    """
    Build the standard response: session state plus a preview of the current image.

    Runs off the event loop, since reading the session waits for any effect
    still being applied.
    """
    return await run_in_threadpool(_build_response, editor, thumbnail_width, message, ms)


@router.get("/state")
@safe_endpoint
async def get_state(editor=Depends(get_editor_service)) -> ImageState:
    """Get the current session state."""
    stats = await run_in_threadpool(editor.get_state)
    return ImageState.from_stats(stats)


@router.post("/load/file")
@safe_endpoint
async def load_file(
    request: LoadFileRequest,
    editor=Depends(get_editor_service),
    thumbnail_width: int = Depends(get_thumbnail_width),
) -> EditorResponse:
    """
    Load an image file.

    Relative paths resolve against the configured storage directory.

    Raises:
        HTTPException 404: If the file does not exist
    """
    ms = await run_in_threadpool(editor.load_file, request.file_path)
    return await _editor_response(editor, thumbnail_width, f"Loaded {request.file_path}", ms)


@router.post("/load/rainbow")
@safe_endpoint
async def load_rainbow(
    request: LoadRainbowRequest,
    editor=Depends(get_editor_service),
    thumbnail_width: int = Depends(get_thumbnail_width),
) -> EditorResponse:
    """Load a generated seven-band stripe pattern."""
    ms = await run_in_threadpool(
        editor.load_rainbow, request.width, request.height, request.horizontal
    )
    return await _editor_response(editor, thumbnail_width, "Loaded rainbow", ms)


@router.post("/load/checkerboard")
@safe_endpoint
async def load_checkerboard(
    request: LoadCheckerboardRequest,
    editor=Depends(get_editor_service),
    thumbnail_width: int = Depends(get_thumbnail_width),
) -> EditorResponse:
    """Load a generated 8x8-tile checkerboard."""
    ms = await run_in_threadpool(editor.load_checkerboard, request.tile_size)
    return await _editor_response(editor, thumbnail_width, "Loaded checkerboard", ms)


@router.post("/effect")
@safe_endpoint
async def apply_effect(
    request: EffectRequest,
    editor=Depends(get_editor_service),
    thumbnail_width: int = Depends(get_thumbnail_width),
) -> EditorResponse:
    """
    Apply a named effect to the current image.

    Raises:
        HTTPException 409: If no image is loaded
        HTTPException 413: If a mosaic exceeds the configured budget
    """
    logger.debug(f"Effect request: {request.to_dict()}")
    ms = await run_in_threadpool(
        editor.apply_named, request.effect, request.seeds, request.rng_seed
    )
    logger.info(f"Effect {request.effect.value} applied in {ms}ms")
    return await _editor_response(editor, thumbnail_width, f"Applied {request.effect.value}", ms)


@router.post("/undo")
@safe_endpoint
async def undo(
    editor=Depends(get_editor_service), thumbnail_width: int = Depends(get_thumbnail_width)
) -> EditorResponse:
    """
    Step back one state.

    Raises:
        HTTPException 409: If there is nothing to undo
    """
    await run_in_threadpool(editor.undo)
    return await _editor_response(editor, thumbnail_width, "Undone")


@router.post("/redo")
@safe_endpoint
async def redo(
    editor=Depends(get_editor_service), thumbnail_width: int = Depends(get_thumbnail_width)
) -> EditorResponse:
    """
    Step forward one undone state.

    Raises:
        HTTPException 409: If there is nothing to redo
    """
    await run_in_threadpool(editor.redo)
    return await _editor_response(editor, thumbnail_width, "Redone")


@router.post("/save")
@safe_endpoint
async def save(request: SaveRequest, editor=Depends(get_editor_service)) -> SaveResponse:
    """Save the current image; the format follows the file extension."""
    path = await run_in_threadpool(editor.save, request.file_path)
    return SaveResponse(file_path=path)


@router.get("/image")
@safe_endpoint
async def get_image(editor=Depends(get_editor_service)) -> ImageResponse:
    """
    Get the full current image as base64 PNG.

    Raises:
        HTTPException 409: If no image is loaded
    """
    image = await run_in_threadpool(editor.output_image)
    encoded = await run_in_threadpool(to_base64, image, format="PNG")
    return ImageResponse(width=image.width, height=image.height, image_base64=encoded)


@router.post("/script")
@safe_endpoint
async def run_script(
    request: ScriptRequest, editor=Depends(get_editor_service), runner=Depends(get_script_runner)
) -> ScriptResponse:
    """
    Run a command script.

    Raises:
        HTTPException 422: If a script line is malformed
    """
    executed = await run_in_threadpool(runner.run, request.script)
    stats = await run_in_threadpool(editor.get_state)
    return ScriptResponse(commands_executed=executed, state=ImageState.from_stats(stats))
