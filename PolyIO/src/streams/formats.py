"""Extension-based classification of file paths.

Classification never touches the filesystem: it looks only at the final extension of the
path (``PurePath.suffix`` without the dot) and matches it, case-sensitively, against a
fixed set per format.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import PurePath
from typing import FrozenSet, Union

PathLike = Union[str, "os.PathLike[str]"]

FASTQ_EXTENSIONS: FrozenSet[str] = frozenset({"fastq", "fq"})
GZIP_EXTENSIONS: FrozenSet[str] = frozenset({"gz", "bgz"})
ZSTD_EXTENSIONS: FrozenSet[str] = frozenset({"zst"})


class Compression(Enum):
    """Compression format of a file, as implied by its extension."""

    PLAIN = "plain"
    GZIP = "gzip"
    ZSTD = "zstd"


def _extension(path: PathLike) -> str:
    return PurePath(os.fspath(path)).suffix[1:]


def _has_extension(path: PathLike, extensions: FrozenSet[str]) -> bool:
    return _extension(path) in extensions


def is_fastq_path(path: PathLike) -> bool:
    """Return True if the path ends with a recognized FASTQ extension."""
    return _has_extension(path, FASTQ_EXTENSIONS)


def is_gzip_path(path: PathLike) -> bool:
    """Return True if the path ends with a recognized gzip extension."""
    return _has_extension(path, GZIP_EXTENSIONS)


def is_zstd_path(path: PathLike) -> bool:
    """Return True if the path ends with a recognized zstd extension."""
    return _has_extension(path, ZSTD_EXTENSIONS)


def classify_path(path: PathLike) -> Compression:
    """Map a path to the compression format used to read or write it.

    Anything without a gzip or zstd extension, including paths with no extension at all,
    is plain text.
    """
    if is_gzip_path(path):
        return Compression.GZIP
    if is_zstd_path(path):
        return Compression.ZSTD
    return Compression.PLAIN
