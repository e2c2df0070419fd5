"""
Incremental Image Optimization Pipeline

Single-run batch tool:
    1. Scan: Recursively discover source images under Images/
    2. Diff: Hash each image and skip those unchanged since the last run
    3. Optimize: Transcode changed images to WebP under Images/optimized/
    4. Persist: Merge results into the key -> URL manifest and update the cache
"""

__version__ = "1.0.0"

from .pipeline_config import PipelineConfig
from .hashing import file_hash
from .keys import derive_key, resolve_url
from .image_record import SourceImage, OptimizeResult
from .scanner import Scanner
from .cache_store import CacheStore, CacheEntry
from .manifest import Manifest
from .webp_encoder import WebpEncoder, InvalidImageError
from .optimizer import Optimizer, OptimizationError
from .run_stats import RunStats, ImageFailure
from .pipeline_progress import PipelineProgress
from .pipeline import Pipeline, PipelineState
from .reporter import Reporter

__all__ = [
    "PipelineConfig",
    "file_hash",
    "derive_key",
    "resolve_url",
    "SourceImage",
    "OptimizeResult",
    "Scanner",
    "CacheStore",
    "CacheEntry",
    "Manifest",
    "WebpEncoder",
    "InvalidImageError",
    "Optimizer",
    "OptimizationError",
    "RunStats",
    "ImageFailure",
    "PipelineProgress",
    "Pipeline",
    "PipelineState",
    "Reporter",
]
