from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from portal_console.app.infrastructure.logging.logger import get_logger, log_action
from portal_console.app.listing.query_serializer import build_list_params
from portal_console.app.listing.result_unwrapper import EMPTY_RESULT, ListResult, unwrap_result
from portal_console.clients.portal_sdk.errors import APIError


class FetchStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True)
class FetchOutcome:
    status: FetchStatus
    request_id: int
    result: ListResult = field(default_factory=ListResult)
    error: APIError | None = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK

    @property
    def is_stale(self) -> bool:
        return self.status is FetchStatus.STALE


class ListReader(Protocol):
    async def list(self, params: dict[str, Any]) -> Any: ...


class PaginatedFetcher:
    """Issues list reads and discards responses overtaken by a newer request."""

    def __init__(
        self,
        reader: ListReader,
        known_keys: Iterable[str] = (),
        resource: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.reader = reader
        self.known_keys = tuple(known_keys)
        self.resource = resource
        self.logger = logger or get_logger(__name__)
        self._latest_request_id = 0

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request_id

    async def fetch(self, page_number: int, page_size: int, serialized_filter: str | None = None) -> FetchOutcome:
        self._latest_request_id += 1
        request_id = self._latest_request_id
        params = build_list_params(page_number, page_size, serialized_filter)
        started = time.monotonic()
        try:
            envelope = await self.reader.list(params)
        except APIError as error:
            if not self.is_current(request_id):
                self._log("stale", request_id, started, None, level=logging.DEBUG)
                return FetchOutcome(FetchStatus.STALE, request_id)
            self._log("error", request_id, started, error.trace_id, level=logging.WARNING, error_code=error.code)
            return FetchOutcome(FetchStatus.FAILED, request_id, EMPTY_RESULT, error)

        if not self.is_current(request_id):
            self._log("stale", request_id, started, None, level=logging.DEBUG)
            return FetchOutcome(FetchStatus.STALE, request_id)

        result = unwrap_result(envelope, self.known_keys)
        self._log("success", request_id, started, None, page=page_number, total=result.total_count)
        return FetchOutcome(FetchStatus.OK, request_id, result)

    def _log(
        self,
        outcome: str,
        request_id: int,
        started: float,
        trace_id: str | None,
        level: int = logging.INFO,
        **context: Any,
    ) -> None:
        log_action(
            self.logger,
            module="listing",
            action="list.fetch",
            resource=self.resource,
            trace_id=trace_id,
            outcome=outcome,
            level=level,
            request_id=request_id,
            duration_ms=int((time.monotonic() - started) * 1000),
            **context,
        )
