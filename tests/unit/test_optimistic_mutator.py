import asyncio

import pytest

from portal_console.app.listing.optimistic_mutator import MutationOutcome, OptimisticMutator, StatusToggleRule
from portal_console.app.notifications import ERROR, SUCCESS, RecordingNotifier
from portal_console.clients.portal_sdk.errors import APIError


class _Writer:
    def __init__(self, error: APIError | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, object]] = []
        self.gate: asyncio.Event | None = None

    async def change_status(self, entity_id: str, status):
        self.calls.append((entity_id, status))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return {"ok": True}


def _mutator(rows: list[dict], writer: _Writer, notifier: RecordingNotifier, **kwargs) -> OptimisticMutator:
    return OptimisticMutator(writer, lambda: rows, notifier, **kwargs)


def test_toggle_rule_flips_between_values() -> None:
    rule = StatusToggleRule()

    assert rule.next_status("active") == "deactive"
    assert rule.next_status("deactive") == "active"
    assert rule.next_status(True) == "deactive"
    assert rule.next_status(None) == "active"


@pytest.mark.asyncio
async def test_successful_toggle_keeps_optimistic_value() -> None:
    rows = [{"_id": "x", "status": "active"}]
    writer = _Writer()
    notifier = RecordingNotifier()

    outcome = await _mutator(rows, writer, notifier).toggle(rows[0])

    assert outcome is MutationOutcome.APPLIED
    assert rows[0]["status"] == "deactive"
    assert writer.calls == [("x", "deactive")]
    assert notifier.kinds() == [SUCCESS]


@pytest.mark.asyncio
async def test_failed_toggle_restores_previous_value() -> None:
    rows = [{"_id": "x", "status": "active"}]
    writer = _Writer(error=APIError(code="HTTP_500", message="boom", status_code=500, trace_id="t-1"))
    notifier = RecordingNotifier()

    outcome = await _mutator(rows, writer, notifier).toggle("x")

    assert outcome is MutationOutcome.REVERTED
    assert rows[0]["status"] == "active"
    assert notifier.kinds() == [ERROR]
    assert "trace_id=t-1" in notifier.messages[0][1]


@pytest.mark.asyncio
async def test_row_shows_optimistic_value_while_write_is_pending() -> None:
    rows = [{"_id": "x", "status": "active"}]
    writer = _Writer()
    writer.gate = asyncio.Event()
    mutator = _mutator(rows, writer, RecordingNotifier())

    task = asyncio.create_task(mutator.toggle("x"))
    await asyncio.sleep(0)

    assert rows[0]["status"] == "deactive"
    assert mutator.is_processing("x")
    writer.gate.set()
    await task
    assert not mutator.is_processing("x")


@pytest.mark.asyncio
async def test_second_toggle_while_in_flight_is_rejected() -> None:
    rows = [{"_id": "x", "status": "active"}]
    writer = _Writer()
    writer.gate = asyncio.Event()
    mutator = _mutator(rows, writer, RecordingNotifier())

    first = asyncio.create_task(mutator.toggle("x"))
    await asyncio.sleep(0)
    second = await mutator.toggle("x")
    writer.gate.set()

    assert second is MutationOutcome.REJECTED
    assert await first is MutationOutcome.APPLIED
    assert writer.calls == [("x", "deactive")]


@pytest.mark.asyncio
async def test_toggle_of_row_not_on_screen_writes_nothing() -> None:
    writer = _Writer()

    outcome = await _mutator([{"_id": "x", "status": "active"}], writer, RecordingNotifier()).toggle("missing")

    assert outcome is MutationOutcome.NOT_FOUND
    assert writer.calls == []


@pytest.mark.asyncio
async def test_rollback_leaves_rows_from_a_newer_fetch_alone() -> None:
    rows = [{"_id": "x", "status": "active"}]
    writer = _Writer(error=APIError(code="HTTP_500", message="boom", status_code=500))
    writer.gate = asyncio.Event()
    mutator = _mutator(rows, writer, RecordingNotifier())

    task = asyncio.create_task(mutator.toggle("x"))
    await asyncio.sleep(0)
    rows[0]["status"] = "archived"
    writer.gate.set()

    assert await task is MutationOutcome.REVERTED
    assert rows[0]["status"] == "archived"


@pytest.mark.asyncio
async def test_custom_rule_and_id_field() -> None:
    rows = [{"uid": 7, "state": "inactive"}]
    writer = _Writer()
    mutator = _mutator(
        rows,
        writer,
        RecordingNotifier(),
        rule=StatusToggleRule(on="active", off="inactive"),
        id_field="uid",
        status_field="state",
    )

    await mutator.toggle({"uid": 7})

    assert rows[0]["state"] == "active"
    assert writer.calls == [("7", "active")]
