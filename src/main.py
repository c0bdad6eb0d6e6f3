"""
Image Effect Engine - Main FastAPI Application

Run as a server:            python src/main.py
Run a batch script instead: python src/main.py --script path/to/script.txt
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import editor, system  # noqa: E402
from common.constants import SystemConstants  # noqa: E402
from common.exceptions import ImageEngineError  # noqa: E402
from config import get_settings  # noqa: E402
from services.editor_service import EditorService  # noqa: E402
from services.script_runner import ScriptRunner  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
    filename=settings.system.log_file,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Image Effect Engine server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    # A test client may have installed its own service already
    if getattr(app.state, "editor_service", None) is None:
        app.state.editor_service = EditorService.from_settings(settings)
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug
    app.state.thumbnail_width = settings.api.thumbnail_width
    app.state.max_script_lines = settings.api.max_script_lines

    logger.info("Editor service initialized")

    yield

    # Shutdown
    logger.info("Image Effect Engine server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Image Effect Engine",
    description="Raster image effects with undo/redo history",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(editor.router, prefix="/api/editor", tags=["Editor"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Image Effect Engine",
        "status": "running",
        "version": "1.0.0",
        "api_version": settings.api.api_version,
        "endpoints": {
            "editor": "/api/editor",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


def run_script(script_path: str) -> int:
    """
    Run a command script in batch mode.

    Returns:
        Process exit code: 0 on success, 1 if the script cannot be read,
        2 if a command fails
    """
    editor_service = EditorService.from_settings(settings)
    runner = ScriptRunner(editor_service, max_lines=settings.api.max_script_lines)

    try:
        script = Path(script_path).read_text()
    except OSError as e:
        logger.error(f"Cannot read script {script_path}: {e}")
        return 1

    try:
        executed = runner.run(script)
    except (ImageEngineError, FileNotFoundError) as e:
        logger.error(f"Script {script_path} failed: {e}")
        return 2

    logger.info(f"{executed} command(s) executed from {script_path}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Image Effect Engine")
    parser.add_argument("--script", help="Run a command script instead of serving the API")
    args = parser.parse_args(argv)

    if args.script:
        return run_script(args.script)

    server_config = uvicorn.Config(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
