"""
PipelineConfig - Configuration for an optimization run.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Union

from dotenv import dotenv_values

IMAGES_DIRNAME = 'Images'
OPTIMIZED_DIRNAME = 'optimized'
MANIFEST_FILENAME = 'image-manifest.json'
CACHE_FILENAME = '.image-cache.json'
DEFAULT_CONCURRENCY = 5

TRUE_VALUES = ('1', 'true')


def parse_flag(value: Optional[str]) -> bool:
    """Interpret an environment flag; only '1' and 'true' enable it."""
    return (value or '').strip().lower() in TRUE_VALUES


@dataclass
class PipelineConfig:
    """
    Settings for a pipeline run, built once at startup and passed explicitly.

    Attributes:
        project_root: Directory holding the Images tree and .env
        base_url: Public base URL for optimized files (no trailing slash), or None
        remove_source: Delete each source after it is optimized
        manifest_copy_path: Optional second location the manifest is copied to
        concurrency: Maximum simultaneous encodes
        dry_run: Scan and diff only; encode and persist nothing
    """
    project_root: Path
    base_url: Optional[str] = None
    remove_source: bool = False
    manifest_copy_path: Optional[Path] = None
    concurrency: int = DEFAULT_CONCURRENCY
    dry_run: bool = False
    errors: List[str] = field(default_factory=list, repr=False)

    def __post_init__(self):
        self.project_root = Path(self.project_root).resolve()
        if self.base_url:
            self.base_url = self.base_url.rstrip('/')
        else:
            self.base_url = None
        if self.manifest_copy_path is not None:
            self.manifest_copy_path = self.project_root / self.manifest_copy_path

    @property
    def images_dir(self) -> Path:
        """Scan root."""
        return self.project_root / IMAGES_DIRNAME

    @property
    def optimized_dir(self) -> Path:
        """Optimized output root, excluded from scanning."""
        return self.images_dir / OPTIMIZED_DIRNAME

    @property
    def manifest_path(self) -> Path:
        return self.images_dir / MANIFEST_FILENAME

    @property
    def cache_path(self) -> Path:
        return self.images_dir / CACHE_FILENAME

    @property
    def local_url_prefix(self) -> str:
        """Manifest prefix used when no base URL is configured."""
        return f"{IMAGES_DIRNAME}/{OPTIMIZED_DIRNAME}"

    @classmethod
    def from_env(
        cls,
        project_root: Union[str, Path] = '.',
        environ: Optional[Mapping[str, str]] = None
    ) -> 'PipelineConfig':
        """
        Create config from ``<project_root>/.env`` and the process environment.

        Process environment values take precedence over the .env file.

        Args:
            project_root: Project directory
            environ: Environment mapping (default: os.environ)

        Returns:
            PipelineConfig; parse problems are collected in ``errors``
        """
        root = Path(project_root)
        values = {k: v for k, v in dotenv_values(root / '.env').items() if v is not None}
        values.update(os.environ if environ is None else environ)

        errors: List[str] = []
        concurrency = DEFAULT_CONCURRENCY
        raw_concurrency = values.get('IMAGE_PIPELINE_CONCURRENCY', '').strip()
        if raw_concurrency:
            try:
                concurrency = int(raw_concurrency)
            except ValueError:
                errors.append(f"IMAGE_PIPELINE_CONCURRENCY must be an integer, got {raw_concurrency!r}")

        copy_path = values.get('REACT_MANIFEST_OUTPUT', '').strip()

        return cls(
            project_root=root,
            base_url=values.get('IMAGES_BASE_URL', '').strip() or None,
            remove_source=parse_flag(values.get('REMOVE_SOURCE_AFTER_OPTIMIZE')),
            manifest_copy_path=Path(copy_path) if copy_path else None,
            concurrency=concurrency,
            errors=errors,
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = list(self.errors)
        if self.concurrency < 1:
            errors.append(f"Concurrency must be at least 1, got {self.concurrency}")
        if self.base_url and not self.base_url.startswith(('http://', 'https://')):
            errors.append(f"IMAGES_BASE_URL must start with http:// or https://, got {self.base_url!r}")
        return errors
