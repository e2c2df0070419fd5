"""
CacheStore - Persisted map of logical key to last-seen content hash.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from .json_store import read_json_object, write_json_object


@dataclass
class CacheEntry:
    """
    Last processing record for one logical key.
    
    Attributes:
        hash: SHA-256 hex digest of the source when last optimized
        processed_at: Epoch milliseconds of that optimization
    """
    hash: str
    processed_at: int = 0
    
    def to_dict(self) -> dict:
        return {'hash': self.hash, 'processedAt': self.processed_at}
    
    @classmethod
    def from_dict(cls, data: dict) -> 'CacheEntry':
        try:
            processed_at = int(data.get('processedAt') or 0)
        except (TypeError, ValueError):
            processed_at = 0
        return cls(hash=str(data.get('hash', '')), processed_at=processed_at)


@dataclass
class CacheStore:
    """
    Content-hash cache driving the skip decision.
    
    Entries are only added or replaced for images that were actually
    reprocessed; nothing is ever pruned.
    """
    entries: Dict[str, CacheEntry] = field(default_factory=dict)
    
    def __len__(self) -> int:
        return len(self.entries)
    
    def __contains__(self, key: str) -> bool:
        return key in self.entries
    
    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key, if any."""
        return self.entries.get(key)
    
    def is_fresh(self, key: str, content_hash: str, manifest) -> bool:
        """
        Check whether an image can be skipped.
        
        A matching hash is only trusted when the manifest still holds a
        non-empty value for the key; otherwise the image must be reprocessed.
        
        Args:
            key: Logical key
            content_hash: Hash computed this run
            manifest: Manifest (or mapping) of key to stored value
        """
        entry = self.entries.get(key)
        return entry is not None and entry.hash == content_hash and bool(manifest.get(key))
    
    def update(self, key: str, content_hash: str, processed_at: Optional[int] = None) -> CacheEntry:
        """Record a successful optimization."""
        if processed_at is None:
            processed_at = int(time.time() * 1000)
        entry = CacheEntry(hash=content_hash, processed_at=processed_at)
        self.entries[key] = entry
        return entry
    
    def to_dict(self) -> dict:
        return {key: entry.to_dict() for key, entry in self.entries.items()}
    
    @classmethod
    def from_dict(cls, data: dict) -> 'CacheStore':
        store = cls()
        for key, value in data.items():
            if isinstance(value, dict):
                store.entries[key] = CacheEntry.from_dict(value)
        return store
    
    def save(self, filepath: Union[str, Path]) -> None:
        """Save cache to JSON file."""
        write_json_object(filepath, self.to_dict())
    
    @classmethod
    def load(
        cls,
        filepath: Union[str, Path],
        logger: Optional[logging.Logger] = None
    ) -> 'CacheStore':
        """Load cache from JSON file; a missing or corrupt file yields an empty cache."""
        return cls.from_dict(read_json_object(filepath, logger))
