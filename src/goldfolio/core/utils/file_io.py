"""
File I/O utilities: safe writes, JSON documents, and timestamped backups.

All functions operate on explicit paths; there are no implicit directory lookups.
"""

from __future__ import annotations

import json
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from goldfolio.core.exceptions import FileIOError


def safe_write(filepath: str, content: str, mode: str = "w", encoding: str = "utf-8") -> None:
    """Write content to a file, creating parent directories as needed."""
    os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
    with open(filepath, mode, encoding=encoding) as f:
        f.write(content)


def backup_file(file_path: str, backup_dir: str | None = None) -> str | None:
    """Create a timestamped backup of a file. Returns backup path or None."""
    src = Path(file_path)
    if not src.exists():
        return None

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_name = f"{src.name}.backup.{timestamp}"

    if backup_dir:
        backup_path = Path(backup_dir) / backup_name
        backup_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        backup_path = src.parent / backup_name

    try:
        shutil.copy2(str(src), str(backup_path))
    except OSError as e:
        logger.warning(f"Could not back up {src}: {e}")
        return None
    return str(backup_path)


def read_json(filepath: str) -> Any:
    """Read and decode a JSON file.

    Raises:
        FileIOError: If the file cannot be read or is not valid JSON.
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise FileIOError(f"Cannot read {filepath}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileIOError(f"Invalid JSON in {filepath}: {e}") from e


def write_json(
    filepath: str,
    data: Any,
    indent: int | None = 2,
    backup: bool = False,
    backup_dir: str | None = None,
) -> str | None:
    """Serialize data as UTF-8 JSON, optionally backing up the previous file.

    Returns:
        The backup path when one was made, else None.
    """
    backup_path = backup_file(filepath, backup_dir) if backup else None
    content = json.dumps(data, indent=indent, ensure_ascii=False)
    try:
        safe_write(filepath, content + "\n")
    except OSError as e:
        raise FileIOError(f"Cannot write {filepath}: {e}") from e
    return backup_path
