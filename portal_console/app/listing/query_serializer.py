from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from portal_console.app.listing.calendar_range import CalendarRangeNormalizer


class FieldKind(str, Enum):
    TEXT = "text"
    ENUM = "enum"
    DATE_RANGE = "date-range"


@dataclass(frozen=True)
class FilterField:
    name: str
    kind: FieldKind
    wire_field: str | None = None
    options: tuple[str, ...] | None = None
    debounced: bool = False

    @property
    def target(self) -> str:
        return self.wire_field or self.name

    def empty_value(self) -> Any:
        return [] if self.kind is FieldKind.DATE_RANGE else ""


def is_empty(field: FilterField, value: Any) -> bool:
    if value is None:
        return True
    if field.kind is FieldKind.TEXT:
        return not str(value).strip()
    if field.kind is FieldKind.ENUM:
        return value == ""
    markers = date_markers(value)
    return not markers or is_missing_marker(markers[0])


def is_missing_marker(marker: Any) -> bool:
    """A cleared date picker yields None or a blank string."""
    return marker is None or (isinstance(marker, str) and not marker.strip())


def date_markers(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, Sequence) and not isinstance(value, str):
        return list(value)
    return [value]


def build_where_clause(
    applied: Mapping[str, Any],
    fields: Iterable[FilterField],
    normalizer: CalendarRangeNormalizer | None = None,
) -> dict[str, Any]:
    normalizer = normalizer or CalendarRangeNormalizer()
    where: dict[str, Any] = {}
    for field in fields:
        value = applied.get(field.name)
        if is_empty(field, value):
            continue
        if field.kind is FieldKind.TEXT:
            where[field.target] = str(value).strip()
        elif field.kind is FieldKind.ENUM:
            where[field.target] = value
        else:
            markers = date_markers(value)
            end = markers[1] if len(markers) > 1 and not is_missing_marker(markers[1]) else None
            where[field.target] = normalizer.normalize(markers[0], end).to_wire()
    return where


def serialize_filter(
    applied: Mapping[str, Any],
    fields: Iterable[FilterField],
    normalizer: CalendarRangeNormalizer | None = None,
) -> str | None:
    where = build_where_clause(applied, fields, normalizer)
    if not where:
        return None
    return json.dumps({"where": where}, ensure_ascii=False, separators=(",", ":"))


def build_list_params(page: int, limit: int, serialized_filter: str | None = None) -> dict[str, Any]:
    params: dict[str, Any] = {"page": page, "limit": limit}
    if serialized_filter:
        params["filter"] = serialized_filter
    return params
