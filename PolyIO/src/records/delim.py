"""Read and write typed records as delimited (CSV/TSV) text.

Files are opened through :class:`~PolyIO.src.streams.gateway.StreamGateway`, so the
compression format follows the path's extension independently of the delimiter:
``samples.tsv.gz`` is both tab-delimited and gzip-compressed.
"""

from __future__ import annotations

import csv
import io
import itertools
import logging
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Type, TypeVar

from ..streams.formats import PathLike
from ..streams.gateway import StreamGateway
from ..utils.errors import ConversionError
from .serializer import RecordSchema

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QuoteMode(Enum):
    """When to wrap field values in double quotes on write."""

    # Quote fields containing the delimiter, a quote or a line terminator
    NECESSARY = "necessary"
    # Never quote; fields containing the delimiter will not read back correctly
    NEVER = "never"


def _check_delimiter(delimiter: str) -> None:
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")
    if delimiter in '"\r\n':
        raise ValueError(f"delimiter cannot be a quote or line terminator, got {delimiter!r}")


def _row_writer(text: io.TextIOBase, delimiter: str, quote: QuoteMode) -> Callable[[Sequence[str]], object]:
    if quote is QuoteMode.NEVER:
        # csv.writer refuses QUOTE_NONE output that would need escaping
        def write_row(values: Sequence[str]) -> int:
            return text.write(delimiter.join(values) + "\n")

        return write_row
    writer = csv.writer(text, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    return writer.writerow


class DelimFile:
    """Reads and writes dataclass or pydantic records to delimited files.

    The first row of every file is a header naming the record's fields in declaration
    order. On read, columns are matched to fields by header name, not by position.

    Example:
        >>> @dataclass
        ... class Sample:
        ...     name: str
        ...     count: int
        >>> delim = DelimFile()
        >>> delim.write_tsv("samples.tsv.gz", [Sample("s1", 100)])
        >>> delim.read_tsv("samples.tsv.gz", Sample)
        [Sample(name='s1', count=100)]
    """

    def __init__(self, gateway: Optional[StreamGateway] = None) -> None:
        self.gateway = gateway or StreamGateway()

    def write(
        self,
        path: PathLike,
        records: Iterable[T],
        record_type: Optional[Type[T]] = None,
        delimiter: str = ",",
        quote: QuoteMode = QuoteMode.NECESSARY,
    ) -> None:
        """Write records to a delimited file, header first.

        Args:
            path: Output path; its extension selects the compression format.
            records: Records that all share one type.
            record_type: Type that defines the header. Defaults to the type of the
                first record; required when ``records`` may be empty.
            delimiter: Single separator character.
            quote: Quoting policy for field values.

        Raises:
            ConversionError: If no schema can be derived or a record cannot be rendered.
            IoError: On any stream failure.
        """
        _check_delimiter(delimiter)
        quote = QuoteMode(quote)
        iterator = iter(records)
        if record_type is None:
            try:
                first = next(iterator)
            except StopIteration:
                raise ConversionError(
                    f"Cannot derive a header for {path} from an empty record sequence; pass record_type"
                ) from None
            record_type = type(first)
            iterator = itertools.chain([first], iterator)
        schema = RecordSchema(record_type)

        count = 0
        with self.gateway.open_writer(path) as stream:
            with io.TextIOWrapper(stream, encoding="utf-8", newline="") as text:
                write_row = _row_writer(text, delimiter, quote)
                write_row(schema.field_names)
                for count, record in enumerate(iterator, start=1):
                    # Header is row 1
                    try:
                        write_row(schema.to_values(record, row=count + 1))
                    except UnicodeEncodeError as exc:
                        raise ConversionError(
                            f"Record cannot be written to {path} as UTF-8 text", row=count + 1, cause=exc
                        ) from exc
        logger.debug(f"Wrote {count} {schema.record_type.__name__} records to {path}")

    def write_tsv(self, path: PathLike, records: Iterable[T], record_type: Optional[Type[T]] = None) -> None:
        """Write records to a tab-separated file, quoting as necessary."""
        self.write(path, records, record_type, "\t", QuoteMode.NECESSARY)

    def write_csv(self, path: PathLike, records: Iterable[T], record_type: Optional[Type[T]] = None) -> None:
        """Write records to a comma-separated file, quoting as necessary."""
        self.write(path, records, record_type, ",", QuoteMode.NECESSARY)

    def read(self, path: PathLike, record_type: Type[T], delimiter: str = ",", quote: bool = True) -> List[T]:
        """Read every record from a delimited file.

        Args:
            path: Input path; its extension selects the compression format.
            record_type: Dataclass or pydantic model to build from each row.
            delimiter: Single separator character.
            quote: If True, quoted fields are unescaped. If False, quote characters are
                ordinary data.

        Raises:
            ConversionError: If the header is missing or does not match the record's
                fields, or a row cannot be converted. The offending row is reported.
            IoError: On any stream failure.
        """
        _check_delimiter(delimiter)
        schema = RecordSchema(record_type)
        records: List[T] = []
        with self.gateway.open_reader(path) as stream:
            with io.TextIOWrapper(stream, encoding="utf-8", newline="") as text:
                reader = csv.reader(
                    text,
                    delimiter=delimiter,
                    quoting=csv.QUOTE_MINIMAL if quote else csv.QUOTE_NONE,
                )
                try:
                    header = self._read_header(reader, schema, path)
                    for row in reader:
                        if not row:
                            continue
                        if len(row) != len(header):
                            raise ConversionError(
                                f"Expected {len(header)} columns in {path}, found {len(row)}",
                                row=reader.line_num,
                            )
                        records.append(schema.from_pairs(zip(header, row), row=reader.line_num))
                except csv.Error as exc:
                    raise ConversionError(f"Malformed delimited text in {path}", row=reader.line_num, cause=exc) from exc
                except UnicodeDecodeError as exc:
                    raise ConversionError(f"{path} is not valid UTF-8 text", row=reader.line_num + 1, cause=exc) from exc
        logger.debug(f"Read {len(records)} {schema.record_type.__name__} records from {path}")
        return records

    def read_tsv(self, path: PathLike, record_type: Type[T]) -> List[T]:
        """Read records from a tab-separated file."""
        return self.read(path, record_type, "\t", True)

    def read_csv(self, path: PathLike, record_type: Type[T]) -> List[T]:
        """Read records from a comma-separated file."""
        return self.read(path, record_type, ",", True)

    @staticmethod
    def _read_header(reader: Iterator[List[str]], schema: RecordSchema, path: PathLike) -> List[str]:
        header = next((row for row in reader if row), None)
        if header is None:
            raise ConversionError(f"{path} has no header row")

        duplicates = sorted({name for name in header if header.count(name) > 1})
        if duplicates:
            raise ConversionError(f"Duplicate columns in header of {path}: {', '.join(duplicates)}", row=reader.line_num)

        unknown = [name for name in header if name not in schema.field_names]
        missing = [name for name in schema.field_names if name not in header]
        if unknown or missing:
            problems = []
            if unknown:
                problems.append(f"unknown columns: {', '.join(unknown)}")
            if missing:
                problems.append(f"missing columns: {', '.join(missing)}")
            raise ConversionError(
                f"Header of {path} does not match {schema.record_type.__name__} ({'; '.join(problems)})",
                row=reader.line_num,
            )
        return header
