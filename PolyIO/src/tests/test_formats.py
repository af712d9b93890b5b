"""Tests for extension-based path classification."""

from pathlib import Path

import pytest

from PolyIO.src.streams.formats import (
    Compression,
    classify_path,
    is_fastq_path,
    is_gzip_path,
    is_zstd_path,
)
from PolyIO.src.streams.gateway import StreamGateway


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("test_fastq.fq.gz", True),
        ("test_fastq.fq.bgz", True),
        ("test_fastq.fq.tar", False),
        ("test_fastq.fq", False),
        ("test_fastq.fq.GZ", False),
        ("gz", False),
    ],
)
def test_is_gzip_path(tmp_path: Path, file_name: str, expected: bool) -> None:
    assert is_gzip_path(tmp_path / file_name) is expected
    assert StreamGateway.is_gzip_path(tmp_path / file_name) is expected


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("test_fastq.fq", False),
        ("test_fastq.fq.gz", False),
        ("test_fastq.fq.bgz", False),
        ("test_fastq.fq.tar", False),
        ("test_fastq.fq.zst", True),
        ("test_fastq.fq.zstd", False),
    ],
)
def test_is_zstd_path(tmp_path: Path, file_name: str, expected: bool) -> None:
    assert is_zstd_path(tmp_path / file_name) is expected
    assert StreamGateway.is_zstd_path(tmp_path / file_name) is expected


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("test_fastq.fq", True),
        ("test_fastq.fastq", True),
        ("test_fastq.sam", False),
        ("test_fastq.fq.gz", False),
        ("test_fastq.FQ", False),
    ],
)
def test_is_fastq_path(tmp_path: Path, file_name: str, expected: bool) -> None:
    assert is_fastq_path(tmp_path / file_name) is expected
    assert StreamGateway.is_fastq_path(tmp_path / file_name) is expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("reads.fq.gz", Compression.GZIP),
        ("reads.fq.bgz", Compression.GZIP),
        ("table.tsv.zst", Compression.ZSTD),
        ("table.tsv", Compression.PLAIN),
        ("README", Compression.PLAIN),
        (".gz", Compression.PLAIN),
        ("archive.tar", Compression.PLAIN),
        ("data/archive.gz.tar", Compression.PLAIN),
    ],
)
def test_classify_path(path: str, expected: Compression) -> None:
    assert classify_path(path) is expected


def test_classification_accepts_str_and_path() -> None:
    """Classification is a pure function of the path text and never hits the disk."""
    assert is_gzip_path("/does/not/exist/x.gz")
    assert is_gzip_path(Path("/does/not/exist/x.gz"))
    assert classify_path(Path("relative/x.zst")) is Compression.ZSTD
