"""
Constants and configuration values for the image effect engine.
Centralizes all magic numbers and configuration constants.
"""


# Pixel Buffer Constants
class ImageConstants:
    """Constants related to pixel buffers."""

    NUM_CHANNELS = 3
    MIN_VAL = 0
    MAX_VAL = 255

    # Thumbnail settings
    DEFAULT_THUMBNAIL_WIDTH = 320
    MIN_THUMBNAIL_WIDTH = 16
    MAX_THUMBNAIL_WIDTH = 4096

    # File formats
    DEFAULT_FORMAT = ".png"
    ALLOWED_FORMATS = [".png", ".jpg", ".jpeg", ".bmp", ".ppm", ".tif", ".tiff"]


# Effect Constants
class EffectConstants:
    """Constants for the image effects."""

    # Mosaic seed range
    MIN_SEEDS = 1
    MAX_SEEDS = 15000

    # Mosaic scan: distance matrix elements evaluated per block
    MOSAIC_BLOCK_SIZE = 1 << 22
    MOSAIC_WORKERS = 4

    # pixels x seeds budget for a single mosaic request
    MAX_MOSAIC_WORK = 2_000_000_000

    # Dither quantizer
    DITHER_THRESHOLD = 128


# Generator Constants
class GeneratorConstants:
    """Constants for the synthetic image generators."""

    CHECKER_TILES_PER_SIDE = 8

    # Spectrum colors (RGB), in band order
    RAINBOW_COLORS = [
        (255, 0, 0),  # red
        (255, 165, 0),  # orange
        (255, 255, 0),  # yellow
        (0, 128, 0),  # green
        (0, 0, 255),  # blue
        (75, 0, 130),  # indigo
        (238, 130, 238),  # violet
    ]


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    API_VERSION = "v1"
    MAX_SCRIPT_LINES = 10000


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Threading
    MAX_WORKER_THREADS = 32

    # File system
    DATA_DIR = "./res"


# Color Constants (RGB)
class Colors:
    """Standard colors for generated images (RGB format)."""

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
