from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from portal_console.app.listing.calendar_range import CalendarRangeNormalizer
from portal_console.app.listing.pagination import PaginationState
from portal_console.app.listing.query_serializer import (
    FieldKind,
    FilterField,
    build_where_clause,
    date_markers,
    serialize_filter,
)


class FilterStatus(str, Enum):
    IDLE = "idle"
    DIRTY = "dirty"


class UnknownFilterFieldError(KeyError):
    pass


class FilterStateController:
    """Draft vs. applied filters for one list screen.

    ``draft`` follows the inputs on every keystroke; ``applied`` only moves on
    ``apply()`` or ``reset()``, and both of those send the screen back to page 1.
    """

    def __init__(
        self,
        fields: Iterable[FilterField],
        pagination: PaginationState | None = None,
        normalizer: CalendarRangeNormalizer | None = None,
    ) -> None:
        self.fields = {field.name: field for field in fields}
        self.pagination = pagination or PaginationState()
        self.normalizer = normalizer or CalendarRangeNormalizer()
        self.draft = self._empty_values()
        self.applied = self._empty_values()
        self.status = FilterStatus.IDLE
        self.last_error: str | None = None

    def field(self, name: str) -> FilterField:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise UnknownFilterFieldError(f"Unknown filter field {name!r}; known: {sorted(self.fields)}") from exc

    def set_draft(self, name: str, value: Any) -> None:
        field = self.field(name)
        if field.kind is FieldKind.ENUM and field.options is not None and value not in (None, "", *field.options):
            raise ValueError(f"{value!r} is not an option of {name!r}: {list(field.options)}")
        if field.kind is FieldKind.DATE_RANGE:
            value = date_markers(value)
        self.draft[name] = value
        self.status = FilterStatus.DIRTY if self.draft != self.applied else FilterStatus.IDLE

    def apply(self) -> bool:
        try:
            build_where_clause(self.draft, self.fields.values(), self.normalizer)
        except (TypeError, ValueError) as exc:
            self.last_error = str(exc)
            return False
        self.last_error = None
        self.applied = _copy_values(self.draft)
        self.pagination.page = 1
        self.status = FilterStatus.IDLE
        return True

    def reset(self) -> None:
        self.draft = self._empty_values()
        self.applied = self._empty_values()
        self.pagination.page = 1
        self.status = FilterStatus.IDLE
        self.last_error = None

    @property
    def is_dirty(self) -> bool:
        return self.status is FilterStatus.DIRTY

    def where_clause(self) -> dict[str, Any]:
        return build_where_clause(self.applied, self.fields.values(), self.normalizer)

    def serialized_filter(self) -> str | None:
        return serialize_filter(self.applied, self.fields.values(), self.normalizer)

    def _empty_values(self) -> dict[str, Any]:
        return {name: field.empty_value() for name, field in self.fields.items()}


def _copy_values(values: dict[str, Any]) -> dict[str, Any]:
    return {key: list(value) if isinstance(value, list) else value for key, value in values.items()}
