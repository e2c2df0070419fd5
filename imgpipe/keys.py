"""
Keys - Logical image keys and delivery URL resolution.
"""

import os
from pathlib import Path
from typing import Optional, Union

KEY_DELIMITER = '_'

PathLike = Union[str, Path]


def derive_key(path: PathLike, base_dir: PathLike) -> str:
    """
    Derive the flat logical key for an image.
    
    Strips the extension from the path relative to ``base_dir`` and joins
    the remaining components with ``_``. ``a/b/c.png`` and ``a/b/c.jpg``
    both map to ``a_b_c``; the later one processed wins.
    
    Args:
        path: Image path (absolute or relative to base_dir)
        base_dir: Scan root the key is relative to
        
    Returns:
        Logical key string
    """
    rel = os.path.relpath(os.fspath(path), os.fspath(base_dir))
    stem, _ext = os.path.splitext(rel)
    return stem.replace('/', KEY_DELIMITER).replace('\\', KEY_DELIMITER)


def to_posix(rel_path: PathLike) -> str:
    """Normalize a relative path to forward slashes."""
    return os.fspath(rel_path).replace('\\', '/')


def resolve_url(rel_path: PathLike, base_url: Optional[str], local_prefix: str) -> str:
    """
    Resolve an output path (relative to the optimized root) to a manifest value.
    
    Args:
        rel_path: Output path relative to the optimized root
        base_url: Public base URL without trailing slash, or None/empty
        local_prefix: Prefix used when no base URL is configured
        
    Returns:
        Absolute URL, or a forward-slash local path
    """
    rel = to_posix(rel_path)
    if not base_url:
        return f"{to_posix(local_prefix).rstrip('/')}/{rel}"
    return f"{base_url}/{rel}"
