"""
WebpEncoder - Pillow-backed codec that transcodes source images to WebP.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageOps


class InvalidImageError(Exception):
    """Raised when a file cannot be decoded as an image with usable dimensions."""


class WebpEncoder:
    """
    Encodes images to WebP using Pillow.

    Orientation from EXIF is applied to the pixels and no metadata
    (EXIF, ICC, XMP) is written to the output.
    """

    FORMAT = 'WEBP'
    EXTENSION = '.webp'

    def __init__(
        self,
        quality: int = 75,
        method: int = 6,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize encoder.

        Args:
            quality: WebP quality 0-100 (default: 75)
            method: Encoder effort 0-6, higher is slower and smaller (default: 6)
            logger: Optional logger instance
        """
        self.quality = quality
        self.method = method
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, source: Union[str, Path]) -> Tuple[int, int]:
        """
        Check that a file decodes as an image with positive dimensions.

        Args:
            source: Path to the source image

        Returns:
            (width, height)

        Raises:
            InvalidImageError: If the file is not a decodable image
        """
        try:
            with Image.open(source) as img:
                width, height = img.size
        except (OSError, Image.DecompressionBombError, SyntaxError, ValueError) as e:
            raise InvalidImageError(f"Invalid image: {source} ({e})") from e

        if not width or not height or width <= 0 or height <= 0:
            raise InvalidImageError(f"Invalid image: {source}")
        return width, height

    def encode(self, source: Union[str, Path], destination: Union[str, Path]) -> int:
        """
        Transcode a source image to a WebP file.

        Args:
            source: Path to the source image
            destination: Output file path

        Returns:
            Size of the written file in bytes
        """
        with Image.open(source) as img:
            img = ImageOps.exif_transpose(img)
            img = self._convert_color_mode(img)
            img.save(
                destination,
                format=self.FORMAT,
                quality=self.quality,
                method=self.method,
                exif=b'',
                icc_profile=None,
            )
        return Path(destination).stat().st_size

    def _convert_color_mode(self, img: Image.Image) -> Image.Image:
        """Convert to a mode the WebP encoder accepts, keeping alpha."""
        if img.mode in ('RGB', 'RGBA'):
            return img
        if img.mode in ('LA', 'PA') or (img.mode == 'P' and 'transparency' in img.info):
            return img.convert('RGBA')
        return img.convert('RGB')

    def output_name(self, source: Union[str, Path]) -> str:
        """Output filename: source stem plus the WebP extension."""
        return Path(source).stem + self.EXTENSION
