"""
Reporter - Human-readable summaries of pipeline runs and persisted state.
"""

import logging
import sys
from typing import Optional, TextIO

from .cache_store import CacheStore
from .manifest import Manifest
from .pipeline_config import PipelineConfig
from .run_stats import RunStats

RULE = '=' * 39
BASE_URL_EXAMPLE = 'https://cdn.jsdelivr.net/gh/USER/REPO@main/img-handler/Images/optimized'


class Reporter:
    """
    Prints run summaries and manifest status reports.
    """

    def __init__(
        self,
        output: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize reporter.

        Args:
            output: Output stream (default: stdout)
            logger: Optional logger instance
        """
        self.output = output or sys.stdout
        self.logger = logger or logging.getLogger(__name__)

    def _print(self, text: str = "") -> None:
        """Print to output stream."""
        print(text, file=self.output)

    def _format_bytes(self, bytes_val: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if bytes_val < 1024:
                return f"{bytes_val:.1f} {unit}"
            bytes_val /= 1024
        return f"{bytes_val:.1f} PB"

    def _format_duration(self, seconds: float) -> str:
        """Format duration as human-readable string."""
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            return f"{seconds / 60:.1f}m"
        else:
            return f"{seconds / 3600:.1f}h"

    def report_summary(self, stats: RunStats, config: Optional[PipelineConfig] = None) -> None:
        """
        Print the end-of-run summary.

        Args:
            stats: Statistics returned by Pipeline.run
            config: Run configuration, used for the base URL hint
        """
        self._print()
        self._print(RULE)
        if config is not None and config.dry_run:
            self._print("DRY RUN - nothing was written")
        self._print(f"Processed:  {stats.processed}")
        self._print(f"Optimized:  {stats.optimized}")
        if config is not None and config.dry_run:
            self._print(f"Pending:    {len(stats.pending)}")
        self._print(f"Skipped:    {stats.skipped}")
        if stats.failures:
            self._print(f"Failed:     {stats.errors}")
        if stats.removed:
            self._print(f"Removed:    {stats.removed}")
        if stats.bytes_generated:
            self._print(f"Written:    {self._format_bytes(stats.bytes_generated)}")
        self._print(f"Time:       {self._format_duration(stats.elapsed_seconds)}")
        self._print(RULE)

        if stats.failures:
            self._print()
            self._print("Failures:")
            for failure in stats.failures:
                self._print(f"  {failure.key}: {failure.error}")

        if stats.collisions:
            self._print()
            self._print("Key collisions (last one processed wins):")
            for key, first, second in stats.collisions:
                self._print(f"  {key}: {first.name}, {second.name}")

        if stats.pending:
            self._print()
            self._print("Would optimize:")
            for key in stats.pending:
                self._print(f"  {key}")

        if stats.manifest_copied_to:
            self._print()
            self._print(f"Manifest copied to {stats.manifest_copied_to}")

        if config is not None and not config.base_url:
            self._print()
            self._print("Add IMAGES_BASE_URL to .env for CDN URLs, e.g.:")
            self._print(f"   {BASE_URL_EXAMPLE}")

    def report_manifest(
        self,
        manifest: Manifest,
        cache: CacheStore,
        config: Optional[PipelineConfig] = None
    ) -> None:
        """
        Print the state of the persisted manifest and cache.

        Args:
            manifest: Loaded manifest (not yet migrated)
            cache: Loaded cache
            config: Optional configuration for file locations
        """
        uncached = [key for key in manifest.keys() if key not in cache]
        legacy = manifest.legacy_keys
        orphaned = [key for key in cache.entries if key not in manifest]

        self._print(RULE)
        self._print("MANIFEST STATUS")
        self._print(RULE)
        if config is not None:
            self._print(f"  Manifest:    {config.manifest_path}")
            self._print(f"  Cache:       {config.cache_path}")
            self._print(f"  Base URL:    {config.base_url or '(local paths)'}")
        self._print(f"  Entries:     {len(manifest)}")
        self._print(f"  Cached:      {len(cache)}")
        self._print(f"  Uncached:    {len(uncached)}")
        self._print(f"  Legacy:      {len(legacy)}")
        self._print(f"  Cache only:  {len(orphaned)}")

        if legacy:
            self._print()
            self._print("Legacy entries (migrated on next run):")
            for key in sorted(legacy):
                self._print(f"  {key}")

        if orphaned:
            self._print()
            self._print("Cached keys missing from manifest (will be reprocessed):")
            for key in sorted(orphaned):
                self._print(f"  {key}")
