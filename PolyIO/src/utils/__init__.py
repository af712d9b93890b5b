"""Utility helpers for PolyIO."""

from .errors import ConversionError, IoError, PolyIOError
from .logging import configure_logging

__all__ = ["PolyIOError", "IoError", "ConversionError", "configure_logging"]
