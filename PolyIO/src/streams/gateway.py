"""Open plain, gzip and zstd files behind one buffered stream interface.

The format is chosen from the path's extension alone (see :mod:`.formats`). Streams are
built as nested layers, each owning the one beneath it, so closing the outermost object
drains and finalizes every layer before the file itself is closed::

    read   plain: BufferedReader(file)
           gzip:  BufferedReader(GzipFile(BufferedReader(file)))
           zstd:  BufferedReader(ZstdDecompressionReader(BufferedReader(file)))
    write  plain: BufferedWriter(file)
           gzip:  BufferedWriter(GzipFile(file))
           zstd:  BufferedWriter(ZstdCompressionWriter(file))
"""

from __future__ import annotations

import gzip
import io
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Union

import zstandard

from ..utils.errors import IoError
from .config import GatewayConfig
from .formats import (
    Compression,
    PathLike,
    classify_path,
    is_fastq_path,
    is_gzip_path,
    is_zstd_path,
)

logger = logging.getLogger(__name__)

# Raised by files and codecs for failed syscalls and corrupt or truncated data
STREAM_ERRORS = (OSError, EOFError, zstandard.ZstdError)


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class StreamGateway:
    """Reads and writes files, transparently handling gzip and zstd compression.

    Example:
        >>> gateway = StreamGateway(GatewayConfig(compression_level=9))
        >>> gateway.write_lines("reads.txt.gz", ["foo", "bar"])
        >>> gateway.read_lines("reads.txt.gz")
        ['foo', 'bar']
    """

    is_fastq_path = staticmethod(is_fastq_path)
    is_gzip_path = staticmethod(is_gzip_path)
    is_zstd_path = staticmethod(is_zstd_path)

    def __init__(self, config: Optional[GatewayConfig] = None) -> None:
        self.config = config or GatewayConfig()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.config!r})"

    def new_reader(self, path: PathLike) -> io.BufferedReader:
        """Open a file for reading, decoding gzip and zstd content.

        Multi-member gzip files (e.g. BGZF) and multi-frame zstd files are read as one
        continuous stream. The codec header is parsed before returning, so a corrupt or
        truncated header fails here; corruption later in the payload surfaces on read.

        Raises:
            IoError: If the file cannot be opened or the decoder cannot start.
        """
        compression = classify_path(path)
        logger.debug(f"Opening {path} for reading ({compression.value}, buffer={self.config.buffer_size})")
        try:
            handle = open(path, "rb", buffering=self.config.buffer_size)
        except OSError as exc:
            raise IoError(f"Unable to open {path} for reading", path=path, cause=exc) from exc

        if compression is Compression.PLAIN:
            return handle

        stream: io.IOBase = handle
        try:
            stream = self._decoder(handle, compression)
            stream = io.BufferedReader(stream, buffer_size=self.config.buffer_size)
            stream.peek(1)
        except STREAM_ERRORS as exc:
            stream.close()
            raise IoError(f"Unable to decode {compression.value} stream {path}", path=path, cause=exc) from exc
        return stream

    def new_writer(self, path: PathLike) -> io.BufferedWriter:
        """Open a file for writing, encoding gzip and zstd content.

        The file is created or truncated. gzip output uses ``config.compression_level``;
        zstd output always uses the zstandard default level, whatever the configuration
        says. Closing the returned stream writes the codec trailer; a stream that is
        never closed leaves a truncated file behind.

        Raises:
            IoError: If the file cannot be created or the encoder cannot start.
        """
        compression = classify_path(path)
        logger.debug(f"Opening {path} for writing ({compression.value}, buffer={self.config.buffer_size})")
        try:
            if compression is Compression.PLAIN:
                return open(path, "wb", buffering=self.config.buffer_size)
            handle = open(path, "wb", buffering=0)
        except OSError as exc:
            raise IoError(f"Unable to open {path} for writing", path=path, cause=exc) from exc

        try:
            encoder = self._encoder(handle, compression)
        except STREAM_ERRORS as exc:
            handle.close()
            raise IoError(f"Unable to start {compression.value} encoder for {path}", path=path, cause=exc) from exc
        return io.BufferedWriter(encoder, buffer_size=self.config.buffer_size)

    @contextmanager
    def open_reader(self, path: PathLike) -> Iterator[io.BufferedReader]:
        """Context manager around :meth:`new_reader` that reports read failures as IoError."""
        stream = self.new_reader(path)
        try:
            with stream:
                yield stream
        except STREAM_ERRORS as exc:
            raise IoError(f"Failed reading {path}", path=path, cause=exc) from exc

    @contextmanager
    def open_writer(self, path: PathLike) -> Iterator[io.BufferedWriter]:
        """Context manager around :meth:`new_writer`.

        The stream is flushed, finalized and closed on every exit path. Write and
        finalization failures are raised as IoError, including when finalization fails
        while another exception is already propagating.
        """
        stream = self.new_writer(path)
        try:
            with stream:
                yield stream
        except STREAM_ERRORS as exc:
            raise IoError(f"Failed writing {path}", path=path, cause=exc) from exc

    def read_lines(self, path: PathLike) -> List[str]:
        """Read all lines of a file, without their line terminators.

        Raises:
            IoError: If the file cannot be read or a line is not valid UTF-8.
        """
        lines: List[str] = []
        with self.open_reader(path) as reader:
            for number, raw in enumerate(reader, start=1):
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    raise IoError(f"Line {number} of {path} is not valid UTF-8", path=path, cause=exc) from exc
                lines.append(_strip_newline(line))
        logger.debug(f"Read {len(lines)} lines from {path}")
        return lines

    def write_lines(self, path: PathLike, lines: Iterable[Union[str, bytes]]) -> None:
        """Write each item followed by a newline. ``bytes`` items are written as-is."""
        count = 0
        with self.open_writer(path) as out:
            for count, line in enumerate(lines, start=1):
                try:
                    data = line if isinstance(line, bytes) else str(line).encode("utf-8")
                except UnicodeEncodeError as exc:
                    raise IoError(f"Line {count} of {path} is not valid UTF-8", path=path, cause=exc) from exc
                out.write(data)
                out.write(b"\n")
        logger.debug(f"Wrote {count} lines to {path}")

    def _decoder(self, handle: io.BufferedReader, compression: Compression) -> io.IOBase:
        if compression is Compression.GZIP:
            decoder = gzip.GzipFile(fileobj=handle, mode="rb")
            # GzipFile only closes files it opened itself
            decoder.myfileobj = handle
            return decoder
        return zstandard.ZstdDecompressor().stream_reader(handle, read_across_frames=True, closefd=True)

    def _encoder(self, handle: io.FileIO, compression: Compression) -> io.IOBase:
        if compression is Compression.GZIP:
            encoder = gzip.GzipFile(
                fileobj=handle,
                filename="",
                mode="wb",
                compresslevel=self.config.compression_level,
                mtime=0,
            )
            encoder.myfileobj = handle
            return encoder
        return zstandard.ZstdCompressor().stream_writer(handle, closefd=True, write_return_read=True)
