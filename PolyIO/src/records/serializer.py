"""Conversion between typed records and ordered (field name, text) pairs.

Records are standard-library dataclasses or pydantic models. pydantic does the type work
in both directions: values are dumped in JSON mode before being rendered as text, and rows
are validated in lax mode so ``"123"`` becomes an ``int`` and ``"true"`` a ``bool``.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError

from ..utils.errors import ConversionError

T = TypeVar("T")


def _is_optional(annotation: Any) -> bool:
    return type(None) in typing.get_args(annotation)


def _field_annotations(record_type: type) -> Dict[str, Any]:
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        return {name: info.annotation for name, info in record_type.model_fields.items()}
    if isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        try:
            hints = typing.get_type_hints(record_type)
        except (NameError, TypeError) as exc:
            raise ConversionError(f"Cannot resolve field types of {record_type.__name__}", cause=exc) from exc
        return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(record_type) if f.init}
    raise ConversionError(f"Unsupported record type {record_type!r}: expected a dataclass or pydantic model")


def _to_text(name: str, value: Any, row: Optional[int] = None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise ConversionError(
        f"Field '{name}' has unsupported type {type(value).__name__} for a delimited column", row=row
    )


class RecordSchema(Generic[T]):
    """Field layout of a record type, in declaration order.

    An empty text value read for an optional field (``Optional[X]`` / ``X | None``)
    becomes ``None``, matching how ``None`` is written.
    """

    def __init__(self, record_type: Type[T]) -> None:
        annotations = _field_annotations(record_type)
        try:
            self._adapter: TypeAdapter[T] = TypeAdapter(record_type)
        except PydanticUserError as exc:
            raise ConversionError(f"Unsupported record type {record_type.__name__}", cause=exc) from exc
        self.record_type = record_type
        self.field_names: List[str] = list(annotations)
        self.optional_fields = frozenset(name for name, ann in annotations.items() if _is_optional(ann))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.record_type.__name__}: {', '.join(self.field_names)})"

    def to_values(self, record: T, row: Optional[int] = None) -> List[str]:
        """Render a record as text values, one per field, in field order."""
        if not isinstance(record, self.record_type):
            raise ConversionError(
                f"Expected a {self.record_type.__name__} record, got {type(record).__name__}", row=row
            )
        data = self._adapter.dump_python(record, mode="json", warnings=False)
        return [_to_text(name, data.get(name), row) for name in self.field_names]

    def to_pairs(self, record: T) -> List[Tuple[str, str]]:
        return list(zip(self.field_names, self.to_values(record)))

    def from_pairs(self, pairs: Iterable[Tuple[str, str]], row: Optional[int] = None) -> T:
        """Build a record from (field name, text) pairs.

        Raises:
            ConversionError: If a field is missing or a value does not parse to its type.
        """
        data: Dict[str, Optional[str]] = {}
        for name, text in pairs:
            data[name] = None if text == "" and name in self.optional_fields else text
        try:
            return self._adapter.validate_python(data)
        except ValidationError as exc:
            raise ConversionError(f"Cannot build {self.record_type.__name__} from row", row=row, cause=exc) from exc
