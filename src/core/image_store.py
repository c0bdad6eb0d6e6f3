"""
Image Store - Reads and writes image files relative to a base directory
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import cv2

from common.constants import ImageConstants
from common.exceptions import ImageIOError, InvalidArgument
from core.image.converters import decode, encode
from core.image.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class ImageStore:
    """Decodes image files into PixelBuffers and encodes them back"""

    def __init__(
        self,
        base_directory: Union[str, Path] = ".",
        default_format: Optional[str] = None,
        allowed_formats: Optional[List[str]] = None,
    ):
        """
        Initialize Image Store

        Args:
            base_directory: Directory that relative file names resolve against
            default_format: Extension appended when a saved name has none;
                None rejects such names
            allowed_formats: Writable extensions (defaults to
                ImageConstants.ALLOWED_FORMATS)
        """
        if base_directory is None:
            raise InvalidArgument("Base directory cannot be None")
        self.base_directory = Path(base_directory)
        self.default_format = default_format
        self.allowed_formats = [
            f.lower() for f in (allowed_formats or ImageConstants.ALLOWED_FORMATS)
        ]

        logger.info(f"Image Store initialized with base directory: {self.base_directory}")

    def resolve(self, name: Union[str, Path]) -> Path:
        """Resolve a file name against the base directory"""
        if name is None or str(name).strip() == "":
            raise InvalidArgument("File name cannot be empty")
        path = Path(name)
        return path if path.is_absolute() else self.base_directory / path

    def read(self, name: Union[str, Path]) -> PixelBuffer:
        """
        Load an image file

        Args:
            name: File name, relative to the base directory or absolute

        Returns:
            Decoded PixelBuffer

        Raises:
            FileNotFoundError: If the file does not exist
            ImageIOError: If the file is not a readable image
        """
        path = self.resolve(name)
        if not path.is_file():
            raise FileNotFoundError(f"Image file not found: {path}")

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read image {path}: {e}")
            raise ImageIOError(str(path), str(e))

        buffer = decode(data, source=str(path))
        logger.debug(f"Read image {path}: {buffer.width}x{buffer.height}")
        return buffer

    def write(self, buffer: PixelBuffer, name: Union[str, Path]) -> Path:
        """
        Save an image file; the format follows the file extension

        Args:
            buffer: Image to save
            name: File name, relative to the base directory or absolute

        Returns:
            Path written

        Raises:
            ImageIOError: If the extension is unsupported or writing fails
        """
        if buffer is None:
            raise InvalidArgument("Image cannot be None")

        path = self.resolve(name)
        if not path.suffix and self.default_format:
            path = path.with_name(path.name + self.default_format)
        ext = path.suffix.lower()
        if ext not in self.allowed_formats:
            raise ImageIOError(str(path), f"unsupported format '{ext or path.name}'")

        try:
            data = encode(buffer, ext)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, cv2.error) as e:
            logger.error(f"Failed to write image {path}: {e}")
            raise ImageIOError(str(path), str(e))

        logger.debug(f"Wrote image {path}: {buffer.width}x{buffer.height}")
        return path
