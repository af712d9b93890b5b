"""Convenience re-exports for the PolyIO package."""

from __future__ import annotations

from .src import get_version
from .src import records, streams, utils
from .src.records import DelimFile, QuoteMode, RecordSchema
from .src.streams import (
    Compression,
    GatewayConfig,
    StreamGateway,
    classify_path,
    is_fastq_path,
    is_gzip_path,
    is_zstd_path,
    load_gateway_config,
    load_gateway_config_file,
)
from .src.utils import ConversionError, IoError, PolyIOError, configure_logging

__all__ = [
    "records",
    "streams",
    "utils",
    "get_version",
    "Compression",
    "classify_path",
    "is_fastq_path",
    "is_gzip_path",
    "is_zstd_path",
    "GatewayConfig",
    "load_gateway_config",
    "load_gateway_config_file",
    "StreamGateway",
    "DelimFile",
    "QuoteMode",
    "RecordSchema",
    "PolyIOError",
    "IoError",
    "ConversionError",
    "configure_logging",
]
