"""Compression-transparent file streams."""

from .config import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_COMPRESSION_LEVEL,
    GatewayConfig,
    load_gateway_config,
    load_gateway_config_file,
)
from .formats import Compression, classify_path, is_fastq_path, is_gzip_path, is_zstd_path
from .gateway import StreamGateway

__all__ = [
    "Compression",
    "classify_path",
    "is_fastq_path",
    "is_gzip_path",
    "is_zstd_path",
    "GatewayConfig",
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_COMPRESSION_LEVEL",
    "load_gateway_config",
    "load_gateway_config_file",
    "StreamGateway",
]
