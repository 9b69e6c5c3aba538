"""Utility helpers shared by the portfolio layer and the CLI."""
