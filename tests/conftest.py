"""
Pytest configuration and fixtures for Image Effect Engine tests
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from core.image.pixel_buffer import PixelBuffer
from core.image_model import VersionedImageModel
from core.image_store import ImageStore
from services.editor_service import EditorService


@pytest.fixture
def uniform_image():
    """5x5 image where every channel is 100"""
    return PixelBuffer.filled(5, 5, (100, 100, 100))


@pytest.fixture
def gradient_image():
    """Small image with distinct values per pixel"""
    grid = np.zeros((6, 8, 3), dtype=np.int64)
    for y in range(6):
        for x in range(8):
            grid[y, x] = (x * 30, y * 40, (x + y) * 10)
    return PixelBuffer(grid)


@pytest.fixture
def single_dot_image():
    """5x5 black image with one grey pixel in the middle"""
    grid = np.zeros((5, 5, 3), dtype=np.int64)
    grid[2, 2] = (100, 100, 100)
    return PixelBuffer(grid)


@pytest.fixture
def model():
    """Empty VersionedImageModel"""
    return VersionedImageModel()


@pytest.fixture
def image_store(tmp_path):
    """ImageStore rooted in a temporary directory"""
    return ImageStore(tmp_path)


@pytest.fixture
def editor_service(image_store):
    """EditorService over a fresh model and temporary store"""
    return EditorService(VersionedImageModel(), image_store, mosaic_workers=2)


@pytest.fixture
def mock_editor():
    """Mock EditorService for script runner tests"""
    return MagicMock(spec=EditorService)
