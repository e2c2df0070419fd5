"""
ImageRecord - Records for source images and their optimization results.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceImage:
    """
    A raster image discovered under the scan root.
    
    Attributes:
        path: Absolute path to the source file
        relative_path: Path relative to the scan root
        extension: Lower-cased extension including the dot (e.g. '.jpg')
        content_hash: SHA-256 hex digest computed this run
        key: Logical key derived from relative_path
    """
    path: Path
    relative_path: Path
    extension: str
    content_hash: str
    key: str


@dataclass(frozen=True)
class OptimizeResult:
    """
    Outcome of a successful optimization.
    
    Attributes:
        key: Logical key of the image
        url: Resolved delivery URL or local relative path
        output_path: Absolute path of the written file
        output_size: Size of the written file in bytes
        source_removed: Whether the source file was deleted
    """
    key: str
    url: str
    output_path: Path
    output_size: int = 0
    source_removed: bool = False
