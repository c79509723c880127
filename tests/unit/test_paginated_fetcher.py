import asyncio

import pytest

from portal_console.app.listing.paginated_fetcher import FetchStatus, PaginatedFetcher
from portal_console.clients.portal_sdk.errors import APIError


class _Reader:
    def __init__(self, response=None, error: APIError | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def list(self, params: dict):
        self.calls.append(params)
        if self.error is not None:
            raise self.error
        return self.response


class _GatedReader:
    """Each call blocks until its gate is opened, so tests control arrival order."""

    def __init__(self) -> None:
        self.gates: list[asyncio.Event] = []
        self.responses: list = []

    def add(self, response) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates.append(gate)
        self.responses.append(response)
        return gate

    async def list(self, params: dict):
        index = params["page"] - 1
        await self.gates[index].wait()
        response = self.responses[index]
        if isinstance(response, APIError):
            raise response
        return response


@pytest.mark.asyncio
async def test_success_unwraps_envelope() -> None:
    reader = _Reader(response={"result": [{"data": [{"_id": "a"}], "total": [{"count": 1}]}]})
    fetcher = PaginatedFetcher(reader)

    outcome = await fetcher.fetch(2, 10, '{"where":{"status":"active"}}')

    assert outcome.status is FetchStatus.OK
    assert outcome.result.items == [{"_id": "a"}]
    assert reader.calls == [{"page": 2, "limit": 10, "filter": '{"where":{"status":"active"}}'}]


@pytest.mark.asyncio
async def test_missing_filter_is_not_sent() -> None:
    reader = _Reader(response=[])
    await PaginatedFetcher(reader).fetch(1, 10)

    assert reader.calls == [{"page": 1, "limit": 10}]


@pytest.mark.asyncio
async def test_failure_yields_empty_result_and_error() -> None:
    error = APIError(code="HTTP_500", message="boom", status_code=500)
    outcome = await PaginatedFetcher(_Reader(error=error)).fetch(1, 10)

    assert outcome.status is FetchStatus.FAILED
    assert outcome.result.items == []
    assert outcome.result.total_count == 0
    assert outcome.error is error


@pytest.mark.asyncio
async def test_late_response_of_older_request_is_discarded() -> None:
    reader = _GatedReader()
    first_gate = reader.add([{"_id": "page-1"}])
    second_gate = reader.add([{"_id": "page-2"}])
    fetcher = PaginatedFetcher(reader)

    first = asyncio.create_task(fetcher.fetch(1, 10))
    second = asyncio.create_task(fetcher.fetch(2, 10))
    await asyncio.sleep(0)
    second_gate.set()
    newest = await second
    first_gate.set()
    older = await first

    assert newest.status is FetchStatus.OK
    assert newest.result.items == [{"_id": "page-2"}]
    assert older.status is FetchStatus.STALE
    assert fetcher.is_current(newest.request_id)


@pytest.mark.asyncio
async def test_late_failure_of_older_request_is_discarded() -> None:
    reader = _GatedReader()
    first_gate = reader.add(APIError(code="NETWORK_ERROR", message="down"))
    second_gate = reader.add([{"_id": "page-2"}])
    fetcher = PaginatedFetcher(reader)

    first = asyncio.create_task(fetcher.fetch(1, 10))
    second = asyncio.create_task(fetcher.fetch(2, 10))
    await asyncio.sleep(0)
    first_gate.set()
    second_gate.set()

    assert (await first).status is FetchStatus.STALE
    assert (await second).status is FetchStatus.OK
