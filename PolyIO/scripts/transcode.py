#!/usr/bin/env python
"""
Copy a file through the stream gateway, converting its compression format.

The input is decoded according to its extension and the output encoded according to
its own, so the same command recompresses, decompresses or compresses:

Usage:
    polyio-transcode --input reads.fq.gz --output reads.fq.zst
    polyio-transcode --input table.tsv.zst --output table.tsv --progress
    python -m PolyIO.scripts.transcode \
        --input table.tsv \
        --output table.tsv.gz \
        --level 9
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from tqdm import tqdm

from PolyIO.src.streams.config import GatewayConfig, load_gateway_config_file
from PolyIO.src.streams.gateway import StreamGateway
from PolyIO.src.utils.errors import PolyIOError
from PolyIO.src.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> GatewayConfig:
    """Merge the optional YAML config with command-line overrides."""
    config = load_gateway_config_file(args.config) if args.config else GatewayConfig()
    overrides = {}
    if args.level is not None:
        overrides["compression_level"] = args.level
    if args.buffer_size is not None:
        overrides["buffer_size"] = args.buffer_size
    if not overrides:
        return config
    return GatewayConfig(
        compression_level=overrides.get("compression_level", config.compression_level),
        buffer_size=overrides.get("buffer_size", config.buffer_size),
    )


def transcode(gateway: StreamGateway, source: Path, target: Path, show_progress: bool = False) -> int:
    """Stream ``source`` into ``target``. Returns the number of decoded bytes copied."""
    chunk_size = gateway.config.buffer_size
    copied = 0
    with gateway.open_reader(source) as reader, gateway.open_writer(target) as writer:
        with tqdm(
            desc=source.name,
            unit="B",
            unit_scale=True,
            disable=not show_progress,
        ) as bar:
            while True:
                chunk = reader.read(chunk_size)
                if not chunk:
                    break
                writer.write(chunk)
                copied += len(chunk)
                bar.update(len(chunk))
    return copied


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Copy a file, converting between plain, gzip and zstd by extension"
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Input file (.gz/.bgz = gzip, .zst = zstd, anything else = plain)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        required=True,
        help="Output file; its extension selects the output format",
    )
    parser.add_argument(
        "--level",
        type=int,
        default=None,
        help="gzip compression level 0-9 (default: 5; not applied to zstd output)",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=None,
        help="Buffer size in bytes for every stream layer (default: 65536)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with an 'io' section (compression_level, buffer_size)",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar of decoded bytes",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file",
    )

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = build_config(args)
    except (OSError, ValueError) as exc:
        parser.error(f"Invalid configuration: {exc}")

    if args.input.resolve() == args.output.resolve():
        parser.error("--input and --output must be different files")

    gateway = StreamGateway(config)
    logger.info(f"Transcoding {args.input} -> {args.output}")
    try:
        copied = transcode(gateway, args.input, args.output, show_progress=args.progress)
    except PolyIOError as exc:
        logger.error(f"Transcoding failed: {exc}")
        return 1

    logger.info(f"Copied {copied} bytes ({os.path.getsize(args.output)} bytes on disk)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
