"""Utility functions for gitwrap."""

from .logging import LogCapture, setup_logging

__all__ = [
    "LogCapture",
    "setup_logging",
]
