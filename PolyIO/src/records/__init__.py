"""Typed records in delimited files."""

from .delim import DelimFile, QuoteMode
from .serializer import RecordSchema

__all__ = ["DelimFile", "QuoteMode", "RecordSchema"]
