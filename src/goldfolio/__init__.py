"""Goldfolio: personal gold-purchase tracking with drift-free numerics."""

__version__ = "0.1.0"
