from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

DEFAULT_LIST_KEYS = ("list",)


@dataclass(frozen=True)
class ListResult:
    items: list[Any] = field(default_factory=list)
    total_count: int = 0


EMPTY_RESULT = ListResult()


def unwrap_result(envelope: Any, known_keys: Iterable[str] = ()) -> ListResult:
    """Reconcile every list envelope the backend emits into items + total.

    Order matters: aggregation ``result[0]`` first, then a bare array, then a
    keyed array (``list`` or a resource key), otherwise an empty result.
    """
    aggregation = _first_aggregation(envelope)
    if aggregation is not None:
        data = aggregation.get("data")
        items = data if isinstance(data, list) else []
        return ListResult(items=items, total_count=_count_from_total(aggregation.get("total")) or 0)

    if isinstance(envelope, list):
        return ListResult(items=envelope, total_count=len(envelope))

    if isinstance(envelope, dict):
        for key in (*DEFAULT_LIST_KEYS, *known_keys):
            items = envelope.get(key)
            if isinstance(items, list):
                total = _count_from_total(envelope.get("total"))
                return ListResult(items=items, total_count=total if total is not None else len(items))

    return EMPTY_RESULT


def _first_aggregation(envelope: Any) -> dict[str, Any] | None:
    if not isinstance(envelope, dict):
        return None
    result = envelope.get("result")
    if isinstance(result, list) and result and isinstance(result[0], dict):
        return result[0]
    return None


def _count_from_total(total: Any) -> int | None:
    if isinstance(total, list):
        head = total[0] if total else None
        return _to_int(head.get("count")) if isinstance(head, dict) else None
    return _to_int(total)


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return max(0, int(value))
    except (TypeError, ValueError):
        return None
