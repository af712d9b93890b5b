"""Configuration for stream construction."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

DEFAULT_COMPRESSION_LEVEL = 5
DEFAULT_BUFFER_SIZE = 64 * 1024


@dataclass(frozen=True)
class GatewayConfig:
    """How streams are layered when a path is opened.

    Attributes:
        compression_level: gzip level (0-9) used when writing ``.gz``/``.bgz`` files.
            It does not apply to ``.zst`` files, which are always written at the
            zstandard default level.
        buffer_size: Capacity in bytes of every buffering layer.

    Instances hold no handles and may be shared by any number of open calls.
    """

    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.compression_level, bool) or not isinstance(self.compression_level, int):
            raise ValueError(f"compression_level must be an integer, got {self.compression_level!r}")
        if not 0 <= self.compression_level <= 9:
            raise ValueError(f"compression_level must be in [0..9], got {self.compression_level}")
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int):
            raise ValueError(f"buffer_size must be an integer, got {self.buffer_size!r}")
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be > 0, got {self.buffer_size}")


def load_gateway_config(config: Optional[Mapping[str, Any]]) -> GatewayConfig:
    """
    Build a GatewayConfig from a configuration mapping.

    Args:
        config: Mapping loaded from YAML. Settings are read from its ``io`` section;
            missing keys (or a missing section) fall back to the defaults.

    Returns:
        GatewayConfig instance

    Example YAML:
        io:
          compression_level: 9
          buffer_size: 131072
    """
    io_cfg = (config or {}).get("io") or {}
    if not isinstance(io_cfg, Mapping):
        raise ValueError(f"'io' section must be a mapping, got {type(io_cfg).__name__}")

    unknown = set(io_cfg).difference({"compression_level", "buffer_size"})
    if unknown:
        raise ValueError(f"Unknown keys in 'io' section: {', '.join(sorted(unknown))}")

    return GatewayConfig(
        compression_level=io_cfg.get("compression_level", DEFAULT_COMPRESSION_LEVEL),
        buffer_size=io_cfg.get("buffer_size", DEFAULT_BUFFER_SIZE),
    )


def load_gateway_config_file(path: Path) -> GatewayConfig:
    """Read a YAML file and build a GatewayConfig from its ``io`` section."""
    with Path(path).open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if data is not None and not isinstance(data, Mapping):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return load_gateway_config(data)
