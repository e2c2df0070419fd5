"""
Pipeline - Orchestrates scan, diff, optimize, merge and persist for one run.
"""

import logging
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Dict, List, Optional

from .cache_store import CacheStore
from .hashing import file_hash
from .image_record import OptimizeResult, SourceImage
from .keys import derive_key
from .manifest import Manifest
from .optimizer import OptimizationError, Optimizer
from .pipeline_config import PipelineConfig
from .pipeline_progress import PipelineProgress
from .run_stats import ImageFailure, RunStats
from .scanner import Scanner


class PipelineState(Enum):
    INIT = 'init'
    SCANNING = 'scanning'
    DIFFING = 'diffing'
    PROCESSING = 'processing'
    MERGING = 'merging'
    PERSISTING = 'persisting'
    REPORTING = 'reporting'
    DONE = 'done'


class Pipeline:
    """
    Runs the incremental image optimization pipeline.

    Stages run in order: scan, hash and diff against the cache, optimize
    changed images concurrently, merge results into the (migrated)
    manifest, then persist cache and manifest. A failure on one image is
    recorded and the run carries on; setup, hashing and persistence errors
    propagate to the caller.
    """

    def __init__(
        self,
        config: PipelineConfig,
        scanner: Optional[Scanner] = None,
        optimizer: Optional[Optimizer] = None,
        progress: Optional[PipelineProgress] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Run configuration
            scanner: Directory scanner (default: Scanner())
            optimizer: Per-image worker (default: Optimizer(config))
            progress: Optional progress tracker
            logger: Optional logger instance
        """
        if config.concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {config.concurrency}")

        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.scanner = scanner or Scanner(logger=self.logger)
        self.optimizer = optimizer or Optimizer(config, logger=self.logger)
        self.progress = progress
        self.state = PipelineState.INIT

    def _enter(self, state: PipelineState, stats: RunStats) -> None:
        self.state = state
        stats.state = state.value
        self.logger.debug(f"State: {state.value}")

    def run(self) -> RunStats:
        """
        Execute one pipeline run.

        Returns:
            RunStats describing the run

        Raises:
            OSError: If the tree cannot be read, a file cannot be hashed,
                or the cache/manifest cannot be written
        """
        stats = RunStats()
        self._enter(PipelineState.INIT, stats)
        if not self.config.dry_run:
            self.config.images_dir.mkdir(parents=True, exist_ok=True)
            self.config.optimized_dir.mkdir(parents=True, exist_ok=True)

        self._enter(PipelineState.SCANNING, stats)
        paths = self.scanner.scan(self.config.images_dir)
        stats.found = len(paths)
        if not paths:
            self.logger.info(f"No images found in {self.config.images_dir}")
            return stats.finish(PipelineState.DONE.value)
        self.logger.info(f"Scanned {len(paths)} image(s) in {self.config.images_dir}")

        self._enter(PipelineState.DIFFING, stats)
        cache = CacheStore.load(self.config.cache_path, self.logger)
        manifest = Manifest.load(self.config.manifest_path, self.logger)
        to_process = self._diff(paths, cache, manifest, stats)

        if self.progress:
            self.progress.on_scan_complete(stats.found, len(to_process))

        if self.config.dry_run:
            stats.pending = [image.key for image in to_process]
            self.logger.info(f"[DRY RUN] {len(to_process)} image(s) would be optimized")
            return stats.finish(PipelineState.DONE.value)

        self._enter(PipelineState.PROCESSING, stats)
        results = self._process(to_process, stats)

        successes: List[OptimizeResult] = []
        for image, result in zip(to_process, results):
            if result is None:
                continue
            cache.update(result.key, image.content_hash)
            successes.append(result)
            stats.optimized += 1
            stats.bytes_generated += result.output_size
            if result.source_removed:
                stats.removed += 1

        self._enter(PipelineState.MERGING, stats)
        stats.migrated = manifest.migrate(self.config.base_url)
        if stats.migrated:
            self.logger.info(f"Migrated {stats.migrated} legacy manifest entries")
        manifest.merge(successes)

        self._enter(PipelineState.PERSISTING, stats)
        manifest.save(self.config.manifest_path)
        cache.save(self.config.cache_path)
        stats.manifest_entries = len(manifest)
        if self.config.manifest_copy_path:
            self._copy_manifest(stats)

        self._enter(PipelineState.REPORTING, stats)
        self.logger.info(
            f"Run complete: {stats.found} found, {stats.optimized} optimized, "
            f"{stats.skipped} skipped, {stats.errors} failed "
            f"({stats.elapsed_seconds:.1f}s)"
        )
        return stats.finish(PipelineState.DONE.value)

    def _diff(
        self,
        paths,
        cache: CacheStore,
        manifest: Manifest,
        stats: RunStats
    ) -> List[SourceImage]:
        """Hash every image and return those that need (re)processing."""
        root = self.config.images_dir
        seen: Dict[str, SourceImage] = {}
        to_process: List[SourceImage] = []

        for path in paths:
            content_hash = file_hash(path)
            image = SourceImage(
                path=path,
                relative_path=path.relative_to(root),
                extension=path.suffix.lower(),
                content_hash=content_hash,
                key=derive_key(path, root),
            )

            previous = seen.get(image.key)
            if previous is not None:
                self.logger.warning(
                    f"Key collision: {previous.relative_path} and {image.relative_path} "
                    f"both map to '{image.key}'; the last one processed wins"
                )
                stats.collisions.append((image.key, previous.path, image.path))
            seen[image.key] = image

            if cache.is_fresh(image.key, content_hash, manifest):
                stats.skipped += 1
                if self.progress:
                    self.progress.on_image_skipped(image)
                continue
            to_process.append(image)

        return to_process

    def _process(
        self,
        images: List[SourceImage],
        stats: RunStats
    ) -> List[Optional[OptimizeResult]]:
        """
        Optimize images with at most ``config.concurrency`` running at once.

        Returns:
            One entry per input image, in input order; None where it failed
        """
        results: List[Optional[OptimizeResult]] = [None] * len(images)
        if not images:
            return results

        with ThreadPoolExecutor(max_workers=self.config.concurrency) as executor:
            futures = {
                executor.submit(self.optimizer.optimize, image): index
                for index, image in enumerate(images)
            }
            for future in as_completed(futures):
                index = futures[future]
                image = images[index]
                try:
                    result = future.result()
                except Exception as e:
                    cause = e.cause if isinstance(e, OptimizationError) else e
                    self._record_failure(image, cause, stats)
                    continue

                results[index] = result
                if result.source_removed:
                    self.logger.info(f"Optimized & removed: {result.key}")
                else:
                    self.logger.info(f"Optimized: {result.key}")
                if self.progress:
                    self.progress.on_image_optimized(image, result)

        return results

    def _record_failure(self, image: SourceImage, cause: BaseException, stats: RunStats) -> None:
        message = str(cause) or type(cause).__name__
        self.logger.error(f"Failed: {image.key} {message}")
        stats.failures.append(ImageFailure(key=image.key, path=image.path, error=message))
        if self.progress:
            self.progress.on_image_failed(image, message)

    def _copy_manifest(self, stats: RunStats) -> None:
        destination = self.config.manifest_copy_path
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.config.manifest_path, destination)
        stats.manifest_copied_to = destination
        self.logger.info(f"Manifest copied to {destination}")
