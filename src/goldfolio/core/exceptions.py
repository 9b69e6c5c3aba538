"""
Goldfolio exception hierarchy.

All goldfolio exceptions inherit from GoldfolioError, making it easy for
callers to catch library-level errors while still distinguishing specific
failure modes. The numeric core never raises; these cover the layers around it.
"""


class GoldfolioError(Exception):
    """Base exception class for all goldfolio errors."""


class ConfigurationError(GoldfolioError):
    """Raised for configuration errors (missing keys, invalid values)."""


class ValidationError(GoldfolioError):
    """Raised when a transaction or rate fails boundary validation."""


class TransactionNotFoundError(GoldfolioError):
    """Raised when a transaction id is not present in the portfolio."""

    def __init__(self, txn_id: str):
        super().__init__(f"Transaction not found: {txn_id}")
        self.txn_id = txn_id


class DataProcessingError(GoldfolioError):
    """Raised for malformed portfolio documents."""


class FileIOError(GoldfolioError):
    """Raised for file I/O errors."""
