"""
PipelineProgress - Tracks and displays per-image progress during a run.
"""

import logging
from typing import Optional

from .image_record import OptimizeResult, SourceImage


class PipelineProgress:
    """
    Receives per-image callbacks from the pipeline.

    With ``show_files`` every image gets a line on stdout; otherwise a
    progress line is logged every ``log_interval`` completed images.
    """

    def __init__(
        self,
        show_files: bool = False,
        log_interval: int = 50,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize progress tracker.

        Args:
            show_files: If True, print each image as it is handled
            log_interval: Log summary progress every N images (when not show_files)
            logger: Optional logger instance
        """
        self.show_files = show_files
        self.log_interval = log_interval
        self.logger = logger or logging.getLogger(__name__)
        self.total = 0
        self.completed = 0
        self.failed = 0

    def on_scan_complete(self, found: int, to_process: int) -> None:
        """Called once hashing and diffing are done."""
        self.total = to_process
        self.logger.info(
            f"Scanned {found} image(s): {to_process} to optimize, "
            f"{found - to_process} unchanged"
        )

    def on_image_skipped(self, image: SourceImage) -> None:
        """Called for an unchanged image."""
        if self.show_files:
            print(f"  [SKIP] {image.key} -> unchanged")

    def on_image_optimized(self, image: SourceImage, result: OptimizeResult) -> None:
        """Called when an image has been written."""
        self.completed += 1
        if self.show_files:
            suffix = " (source removed)" if result.source_removed else ""
            print(f"  [OK] {image.key} -> {result.url}{suffix}")
        self._maybe_log()

    def on_image_failed(self, image: SourceImage, error: str) -> None:
        """Called when an image failed to optimize."""
        self.completed += 1
        self.failed += 1
        if self.show_files:
            print(f"  [ERROR] {image.key} -> {error}")
        self._maybe_log()

    def _maybe_log(self) -> None:
        if self.show_files or not self.log_interval:
            return
        if self.completed % self.log_interval == 0 or self.completed == self.total:
            self.logger.info(
                f"Progress: {self.completed}/{self.total} done, {self.failed} failed"
            )
