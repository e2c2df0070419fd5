"""
Manifest - Persisted map of logical image key to delivery URL.
"""

import locale
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .image_record import OptimizeResult
from .json_store import read_json_object, write_json_object

# Base URL written into manifests before a real one was configured.
PLACEHOLDER_BASE_URL = 'https://cdn.jsdelivr.net/gh/USER/REPO@Images/img-handler/Images/optimized'

# Field preference when collapsing legacy per-format entries.
LEGACY_URL_FIELDS = ('webp', 'avif', 'url')


def collation_key(key: str) -> Tuple[str, str, str]:
    """Sort key: case-insensitive collation under LC_COLLATE, lowercase first on ties."""
    return (locale.strxfrm(key.casefold()), locale.strxfrm(key.swapcase()), key)


def normalize_entry(value) -> str:
    """
    Collapse a stored manifest value to a single URL string.

    Strings are kept as-is. Legacy objects resolve to their first non-empty
    ``webp``, ``avif`` or ``url`` field. Anything else becomes ''.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for name in LEGACY_URL_FIELDS:
            candidate = value.get(name)
            if candidate:
                return str(candidate)
    return ''


def rewrite_placeholder(url: str, base_url: Optional[str], placeholder: str = PLACEHOLDER_BASE_URL) -> str:
    """Swap the historical placeholder base for the configured base URL."""
    if base_url and url.startswith(placeholder):
        return base_url + url[len(placeholder):]
    return url


@dataclass
class Manifest:
    """
    Key to URL mapping produced by the pipeline.

    Loaded entries may still carry the legacy object schema until
    ``migrate`` runs; after that every value is a string.

    Attributes:
        entries: Mapping of logical key to URL (or legacy object)
    """
    entries: Dict[str, object] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: str) -> bool:
        return key in self.entries

    def keys(self):
        return self.entries.keys()

    def get(self, key: str) -> Optional[object]:
        return self.entries.get(key)

    @property
    def legacy_keys(self) -> List[str]:
        """Keys whose value is not yet a plain string."""
        return [k for k, v in self.entries.items() if not isinstance(v, str)]

    def migrate(self, base_url: Optional[str] = None) -> int:
        """
        Normalize all entries to the single-URL schema in place.

        Args:
            base_url: Configured base URL; enables placeholder rewriting

        Returns:
            Number of entries whose stored value changed
        """
        changed = 0
        for key, value in list(self.entries.items()):
            url = rewrite_placeholder(normalize_entry(value), base_url)
            if url != value:
                changed += 1
            self.entries[key] = url
        return changed

    def merge(self, results: Iterable[OptimizeResult]) -> None:
        """Overlay new results; later results win over earlier ones and old entries."""
        for result in results:
            self.entries[result.key] = result.url

    def sorted_entries(self) -> Dict[str, object]:
        """
        Return entries ordered by locale-aware key collation.

        Case is ignored first, then lowercase sorts before uppercase for
        keys that differ only in case.
        """
        ordered: List[Tuple[str, object]] = sorted(self.entries.items(), key=lambda item: collation_key(item[0]))
        return dict(ordered)

    def to_dict(self) -> dict:
        return self.sorted_entries()

    @classmethod
    def from_dict(cls, data: dict) -> 'Manifest':
        return cls(entries=dict(data))

    def save(self, filepath: Union[str, Path]) -> None:
        """Save manifest to JSON file in sorted key order."""
        write_json_object(filepath, self.to_dict())

    @classmethod
    def load(
        cls,
        filepath: Union[str, Path],
        logger: Optional[logging.Logger] = None
    ) -> 'Manifest':
        """Load manifest from JSON file; a missing or corrupt file yields an empty manifest."""
        return cls.from_dict(read_json_object(filepath, logger))
