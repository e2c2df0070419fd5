"""
Hashing - Streaming content digests used for change detection.
"""

import hashlib
from pathlib import Path
from typing import Union

CHUNK_SIZE = 1024 * 1024


def file_hash(path: Union[str, Path], chunk_size: int = CHUNK_SIZE) -> str:
    """
    Compute the SHA-256 hex digest of a file's contents.
    
    The file is read in fixed-size chunks so large images are never held
    in memory as a whole. I/O errors are not caught.
    
    Args:
        path: File to hash
        chunk_size: Bytes read per iteration
        
    Returns:
        Lowercase hex digest
    """
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(chunk_size), b''):
            digest.update(chunk)
    return digest.hexdigest()
