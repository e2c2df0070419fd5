"""
JSON persistence helpers shared by the cache and manifest stores.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def read_json_object(
    filepath: Union[str, Path],
    log: Optional[logging.Logger] = None
) -> dict:
    """
    Read a JSON object from disk.
    
    A missing file, unparseable content or a non-object document all yield
    an empty dict; the last two are logged as warnings.
    
    Args:
        filepath: File to read
        log: Optional logger instance
        
    Returns:
        Parsed mapping, or {} if unavailable
    """
    log = log or logger
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (ValueError, UnicodeDecodeError) as e:
        log.warning(f"Ignoring unreadable JSON in {path}: {e}")
        return {}
    
    if not isinstance(data, dict):
        log.warning(f"Ignoring {path}: expected a JSON object, got {type(data).__name__}")
        return {}
    return data


def write_json_object(filepath: Union[str, Path], data: dict) -> None:
    """Write a mapping as indented JSON, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
