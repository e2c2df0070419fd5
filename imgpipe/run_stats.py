"""
RunStats - Statistics and per-item outcomes for a pipeline run.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass
class ImageFailure:
    """
    A source image that could not be optimized.

    Attributes:
        key: Logical key of the image
        path: Source path
        error: Human-readable cause
    """
    key: str
    path: Path
    error: str


@dataclass
class RunStats:
    """
    Statistics for a pipeline run.

    Attributes:
        found: Images discovered by the scan
        optimized: Images successfully encoded this run
        skipped: Images unchanged since the last run
        bytes_generated: Total bytes of output written
        removed: Source files deleted after optimization
        migrated: Manifest entries rewritten by legacy migration
        manifest_entries: Entries in the persisted manifest
        state: Last pipeline state reached
        manifest_copied_to: Where the manifest was copied, if anywhere
        failures: Per-image failures
        collisions: (key, first path, second path) for keys derived twice
        pending: Keys that needed processing (filled in dry-run mode)
        start_time: Start timestamp
        end_time: End timestamp, set when the run finishes
    """
    found: int = 0
    optimized: int = 0
    skipped: int = 0
    bytes_generated: int = 0
    removed: int = 0
    migrated: int = 0
    manifest_entries: int = 0
    state: str = 'init'
    manifest_copied_to: Optional[Path] = None
    failures: List[ImageFailure] = field(default_factory=list)
    collisions: List[Tuple[str, Path, Path]] = field(default_factory=list)
    pending: List[str] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None

    @property
    def processed(self) -> int:
        """Images considered this run (the scan count)."""
        return self.found

    @property
    def errors(self) -> int:
        """Number of failed images."""
        return len(self.failures)

    @property
    def to_process(self) -> int:
        """Images that needed (re)processing."""
        return self.found - self.skipped

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds, frozen once the run finishes."""
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def finish(self, state: str) -> 'RunStats':
        """Record the final state and stop the clock."""
        self.state = state
        self.end_time = time.time()
        return self
