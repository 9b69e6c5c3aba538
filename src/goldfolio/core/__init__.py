"""Core infrastructure: configuration, exceptions, logging, and file helpers."""
