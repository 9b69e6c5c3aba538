"""JSON-file persistence for portfolio state, plus backup export/import.

The data file holds the document described in goldfolio.portfolio.models.
Backups are the same document with a metadata header:

    {"metadata": {"exportedAt": "...", "version": "2.0", "precision": "0.0000001g"}, ...}

Loading always re-parses numeric fields, so files written by older versions
(or edited by hand with values stored as text) load cleanly.
"""

from __future__ import annotations

import os
from datetime import datetime

from loguru import logger

from goldfolio.core.exceptions import DataProcessingError, FileIOError
from goldfolio.core.types import PathLike
from goldfolio.core.utils.file_io import read_json, write_json

from .models import PortfolioState

BACKUP_FORMAT_VERSION = "2.0"
BACKUP_PRECISION = "0.0000001g"


def default_backup_name(now: datetime | None = None) -> str:
    """File name for a backup taken on the given day."""
    return f"goldfolio-backup-{(now or datetime.now()).date().isoformat()}.json"


def _state_from_file(path: str) -> PortfolioState:
    data = read_json(path)
    try:
        return PortfolioState.from_dict(data)
    except DataProcessingError as e:
        raise FileIOError(f"Malformed portfolio document {path}: {e}") from e


class PortfolioStore:
    """Loads and saves a PortfolioState at a fixed path."""

    def __init__(self, path: PathLike, backup_dir: PathLike | None = None):
        """
        Args:
            path: Location of the JSON data file.
            backup_dir: When set, the previous file is copied here before each save.
        """
        self.path = os.path.expanduser(str(path))
        self.backup_dir = os.path.expanduser(str(backup_dir)) if backup_dir else None

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def load(self, default: PortfolioState | None = None) -> PortfolioState:
        """Read state from disk.

        Returns default (or a fresh PortfolioState) when no file exists yet.

        Raises:
            FileIOError: If the file is unreadable or not a valid document.
        """
        if not self.exists():
            logger.debug(f"No data file at {self.path}, starting empty")
            return default if default is not None else PortfolioState()

        state = _state_from_file(self.path)
        logger.debug(f"Loaded {len(state.transactions)} transactions from {self.path}")
        return state

    def save(self, state: PortfolioState) -> None:
        """Write state to disk, creating parent directories as needed."""
        backup_path = write_json(
            self.path, state.to_dict(), backup=self.backup_dir is not None, backup_dir=self.backup_dir
        )
        if backup_path:
            logger.debug(f"Previous data file backed up to {backup_path}")
        logger.debug(f"Saved {len(state.transactions)} transactions to {self.path}")


def export_backup(state: PortfolioState, path: PathLike, now: datetime | None = None) -> str:
    """Write a backup document with export metadata. Returns the path written.

    If path is an existing directory, the default dated file name is used
    inside it.
    """
    target = os.path.expanduser(str(path))
    if os.path.isdir(target):
        target = os.path.join(target, default_backup_name(now))

    document = {
        "metadata": {
            "exportedAt": (now or datetime.now()).isoformat(timespec="seconds"),
            "version": BACKUP_FORMAT_VERSION,
            "precision": BACKUP_PRECISION,
        },
        **state.to_dict(),
    }
    write_json(target, document)
    logger.info(f"Exported {len(state.transactions)} transactions to {target}")
    return target


def import_backup(path: PathLike) -> PortfolioState:
    """Read a backup (or plain data file) into a new PortfolioState.

    Raises:
        FileIOError: If the file is missing, unreadable or malformed.
    """
    source = os.path.expanduser(str(path))
    if not os.path.exists(source):
        raise FileIOError(f"Backup file not found: {source}")

    state = _state_from_file(source)
    logger.info(f"Imported {len(state.transactions)} transactions from {source}")
    return state
