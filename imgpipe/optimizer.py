"""
Optimizer - Per-image worker that transcodes one source and resolves its URL.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .image_record import OptimizeResult, SourceImage
from .keys import derive_key, resolve_url
from .pipeline_config import PipelineConfig
from .webp_encoder import WebpEncoder


class OptimizationError(Exception):
    """
    A single image failed to optimize.

    Attributes:
        path: Source image path
        cause: Underlying exception
    """

    def __init__(self, path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause}")


class Optimizer:
    """
    Writes the optimized output for one source image.

    Output files mirror the source's subdirectory under the optimized root.
    Workers share no mutable state, so ``optimize`` is safe to call from
    several threads at once.
    """

    def __init__(
        self,
        config: PipelineConfig,
        encoder: Optional[WebpEncoder] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize optimizer.

        Args:
            config: Pipeline configuration (paths, base URL, removal flag)
            encoder: Codec used for validation and encoding
            logger: Optional logger instance
        """
        self.config = config
        self.encoder = encoder or WebpEncoder(logger=logger)
        self.logger = logger or logging.getLogger(__name__)

    def output_path_for(self, image: SourceImage) -> Path:
        """Destination path mirroring the image's relative subdirectory."""
        rel_dir = image.relative_path.parent
        out_dir = self.config.optimized_dir / rel_dir
        return out_dir / self.encoder.output_name(image.path)

    def optimize(self, image: SourceImage) -> OptimizeResult:
        """
        Validate, encode and (optionally) remove one source image.

        Args:
            image: Source image to process

        Returns:
            OptimizeResult with key and resolved URL

        Raises:
            OptimizationError: Wrapping any validation, codec or I/O failure
        """
        key = derive_key(image.path, self.config.images_dir)
        try:
            destination = self.output_path_for(image)
            destination.parent.mkdir(parents=True, exist_ok=True)

            self.encoder.validate(image.path)
            self.logger.debug(f"Encoding: {image.relative_path} -> {destination}")
            output_size = self.encoder.encode(image.path, destination)

            rel_output = os.path.relpath(destination, self.config.optimized_dir)
            url = resolve_url(rel_output, self.config.base_url, self.config.local_url_prefix)

            removed = False
            if self.config.remove_source and image.path.exists():
                image.path.unlink()
                removed = True
        except Exception as e:
            raise OptimizationError(image.path, e) from e

        return OptimizeResult(
            key=key,
            url=url,
            output_path=destination,
            output_size=output_size,
            source_removed=removed,
        )
