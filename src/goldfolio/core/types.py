"""Shared type aliases used across goldfolio."""

from pathlib import Path
from typing import Any

# Config value types
ConfigDict = dict[str, Any]

# Path types
PathLike = str | Path

# A transaction as it appears in the JSON document
TransactionDict = dict[str, Any]
