"""Tests for the polyio-transcode command-line script."""

import gzip
from pathlib import Path

import pytest

from PolyIO.scripts.transcode import main
from PolyIO.src.streams.gateway import StreamGateway

LINES = [f"@read{i}\nACGT\n+\nIIII" for i in range(200)]


def test_transcode_gzip_to_zstd(tmp_path: Path) -> None:
    source = tmp_path / "reads.fq.gz"
    target = tmp_path / "reads.fq.zst"
    StreamGateway().write_lines(source, LINES)

    assert main(["--input", str(source), "--output", str(target)]) == 0
    assert target.read_bytes()[:4] == b"\x28\xb5\x2f\xfd"
    assert StreamGateway().read_lines(target) == StreamGateway().read_lines(source)


def test_transcode_to_plain_with_overrides(tmp_path: Path) -> None:
    source = tmp_path / "reads.fq.zst"
    target = tmp_path / "reads.fq"
    StreamGateway().write_lines(source, LINES)

    assert main(["--input", str(source), "--output", str(target), "--buffer-size", "64", "--progress"]) == 0
    assert target.read_text(encoding="utf-8") == "".join(line + "\n" for line in LINES)


def test_transcode_uses_yaml_config(tmp_path: Path) -> None:
    source = tmp_path / "reads.fq"
    stored = tmp_path / "stored.fq.gz"
    packed = tmp_path / "packed.fq.gz"
    config = tmp_path / "io.yaml"
    source.write_text("".join(line + "\n" for line in LINES), encoding="utf-8")
    config.write_text("io:\n  compression_level: 0\n", encoding="utf-8")

    assert main(["--input", str(source), "--output", str(stored), "--config", str(config)]) == 0
    assert main(["--input", str(source), "--output", str(packed), "--config", str(config), "--level", "9"]) == 0
    assert gzip.decompress(stored.read_bytes()) == gzip.decompress(packed.read_bytes())
    assert stored.stat().st_size > packed.stat().st_size


def test_transcode_missing_input_fails(tmp_path: Path) -> None:
    assert main(["--input", str(tmp_path / "nope.gz"), "--output", str(tmp_path / "out.txt")]) == 1


def test_transcode_rejects_bad_level(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--input", "a.txt", "--output", str(tmp_path / "b.txt.gz"), "--level", "12"])
    assert excinfo.value.code == 2


def test_transcode_rejects_same_file(tmp_path: Path) -> None:
    path = tmp_path / "same.txt"
    path.write_text("x\n", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--input", str(path), "--output", str(path)])
    assert path.read_text(encoding="utf-8") == "x\n"
