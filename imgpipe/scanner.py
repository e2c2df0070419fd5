"""
Scanner - Walks the source tree and enumerates candidate images.
"""

import logging
import os
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Union


class Scanner:
    """
    Recursively discovers raster images under a scan root.
    
    Directories named in ``exclude_dirs`` are skipped at any depth so the
    pipeline never re-ingests its own output. The walk uses an explicit
    stack, so tree depth is not bounded by the interpreter recursion limit.
    """
    
    SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset({'.jpg', '.jpeg', '.png', '.webp'})
    EXCLUDE_DIRS: FrozenSet[str] = frozenset({'optimized'})
    
    def __init__(
        self,
        extensions: Optional[Iterable[str]] = None,
        exclude_dirs: Optional[Iterable[str]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize scanner.
        
        Args:
            extensions: Allowed extensions (default: SUPPORTED_EXTENSIONS)
            exclude_dirs: Directory names never descended into (default: EXCLUDE_DIRS)
            logger: Optional logger instance
        """
        self.extensions = frozenset(
            e.lower() for e in (extensions if extensions is not None else self.SUPPORTED_EXTENSIONS)
        )
        self.exclude_dirs = frozenset(
            exclude_dirs if exclude_dirs is not None else self.EXCLUDE_DIRS
        )
        self.logger = logger or logging.getLogger(__name__)
    
    def is_supported(self, filename: str) -> bool:
        """Check whether a filename has an allowed extension (case-insensitive)."""
        return os.path.splitext(filename)[1].lower() in self.extensions
    
    def scan(self, root: Union[str, Path]) -> List[Path]:
        """
        Scan a directory tree for supported images.
        
        Args:
            root: Scan root directory
            
        Returns:
            Unordered list of absolute file paths; empty if root does not exist
        """
        root = Path(root)
        if not root.is_dir():
            self.logger.debug(f"Scan root does not exist: {root}")
            return []
        
        found: List[Path] = []
        stack = [root.absolute()]
        
        while stack:
            current = stack.pop()
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        if entry.name in self.exclude_dirs:
                            self.logger.debug(f"Skipping excluded directory: {entry.path}")
                        else:
                            stack.append(Path(entry.path))
                    elif entry.is_file() and self.is_supported(entry.name):
                        found.append(Path(entry.path))
        
        self.logger.debug(f"Scanned {root}: {len(found)} candidate images")
        return found
