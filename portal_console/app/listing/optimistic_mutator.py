from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from portal_console.app.infrastructure.errors.error_mapper import ErrorMapper
from portal_console.app.infrastructure.logging.logger import get_logger, log_action
from portal_console.app.notifications import ERROR, SUCCESS, Notifier
from portal_console.clients.portal_sdk.errors import APIError


class MutationOutcome(str, Enum):
    APPLIED = "applied"
    REVERTED = "reverted"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class StatusToggleRule:
    on: Any = "active"
    off: Any = "deactive"

    def next_status(self, current: Any) -> Any:
        return self.off if current is True or current == self.on else self.on


class StatusWriter(Protocol):
    async def change_status(self, entity_id: str, status: Any) -> Any: ...


class OptimisticMutator:
    def __init__(
        self,
        writer: StatusWriter,
        rows: Callable[[], list[dict[str, Any]]],
        notifier: Notifier,
        *,
        rule: StatusToggleRule | None = None,
        id_field: str = "_id",
        status_field: str = "status",
        resource: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.writer = writer
        self.rows = rows
        self.notifier = notifier
        self.rule = rule or StatusToggleRule()
        self.id_field = id_field
        self.status_field = status_field
        self.resource = resource
        self.logger = logger or get_logger(__name__)
        self._in_flight: set[str] = set()

    def is_processing(self, entity_id: str) -> bool:
        return str(entity_id) in self._in_flight

    async def toggle(self, entity: Mapping[str, Any] | str) -> MutationOutcome:
        entity_id = str(entity[self.id_field]) if isinstance(entity, Mapping) else str(entity)
        if entity_id in self._in_flight:
            self._log("rejected", entity_id, None)
            return MutationOutcome.REJECTED

        row = self._find(entity_id)
        if row is None:
            self._log("not_found", entity_id, None, level=logging.WARNING)
            return MutationOutcome.NOT_FOUND

        previous = row.get(self.status_field)
        new_status = self.rule.next_status(previous)
        self._in_flight.add(entity_id)
        row[self.status_field] = new_status
        try:
            await self.writer.change_status(entity_id, new_status)
        except APIError as error:
            self._revert(row, previous, new_status)
            self._log("reverted", entity_id, error.trace_id, level=logging.WARNING, status=previous, error_code=error.code)
            self.notifier.notify(ERROR, ErrorMapper.to_display_message(error, "Status change failed"))
            return MutationOutcome.REVERTED
        finally:
            self._in_flight.discard(entity_id)

        self._log("applied", entity_id, None, status=new_status)
        self.notifier.notify(SUCCESS, "Status changed")
        return MutationOutcome.APPLIED

    def _find(self, entity_id: str) -> dict[str, Any] | None:
        return next((row for row in self.rows() if str(row.get(self.id_field)) == entity_id), None)

    def _revert(self, row: dict[str, Any], previous: Any, optimistic: Any) -> None:
        # rows replaced by a re-fetch while the write was pending are left alone
        if row.get(self.status_field) == optimistic:
            row[self.status_field] = previous

    def _log(self, outcome: str, entity_id: str, trace_id: str | None, level: int = logging.INFO, **context: Any) -> None:
        log_action(
            self.logger,
            module="listing",
            action="status.toggle",
            resource=self.resource,
            trace_id=trace_id,
            outcome=outcome,
            level=level,
            entity_id=entity_id,
            **context,
        )
