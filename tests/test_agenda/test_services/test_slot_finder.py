"""Testes da sugestao de horarios livres."""

from __future__ import annotations

from datetime import date, time
from unittest.mock import AsyncMock

import pytest

from agenda.domain import NoConflict
from agenda.infra.stores import MemoryAppointmentRepository, MemoryIntegrationStore
from agenda.services import ConflictDetector, SlotFinder
from tests.fakes.builders import TZ, appointment, at, external_event, integration
from tests.fakes.fake_calendar_adapter import FakeCalendarAdapter
from utils.errors import InvalidIntervalError

DAY = date(2024, 6, 10)


def _finder(appointments=(), events=None) -> SlotFinder:
    detector = ConflictDetector(
        repository=MemoryAppointmentRepository(appointments),
        integration_store=MemoryIntegrationStore([integration("i1")]),
        calendar_adapter=FakeCalendarAdapter({"i1": events or []}),
    )
    return SlotFinder(detector, zone=TZ)


@pytest.mark.asyncio
async def test_empty_day_returns_first_slots_up_to_cap() -> None:
    slots = await _finder().find_slots(DAY, 60, "dr-1")
    assert [slot.time for slot in slots] == ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30"]
    assert all(slot.date == DAY for slot in slots)
    assert slots[0].datetime == at("2024-06-10", "08:00")


@pytest.mark.asyncio
async def test_busy_slots_are_skipped() -> None:
    finder = _finder(
        [appointment("A", "2024-06-10", "08:00", 60)],
        [external_event("evt", "2024-06-10", "09:30", "10:00")],
    )
    slots = await finder.find_slots(DAY, 30, "dr-1", cap=4)
    assert [slot.time for slot in slots] == ["09:00", "10:00", "10:30", "11:00"]


@pytest.mark.asyncio
async def test_results_are_strictly_ascending_and_capped() -> None:
    slots = await _finder().find_slots(DAY, 30, "dr-1", granularity_minutes=15, cap=10)
    assert len(slots) == 10
    moments = [slot.datetime for slot in slots]
    assert moments == sorted(set(moments))


@pytest.mark.asyncio
async def test_stops_evaluating_once_cap_is_reached() -> None:
    detector = AsyncMock()
    detector.check.return_value = NoConflict()
    finder = SlotFinder(detector, zone=TZ)
    slots = await finder.find_slots(DAY, 60, "dr-1", cap=3)
    assert len(slots) == 3
    assert detector.check.await_count == 3


@pytest.mark.asyncio
async def test_last_start_may_run_past_window_end() -> None:
    finder = _finder()
    slots = await finder.find_slots(
        DAY,
        60,
        "dr-1",
        window_start=time(17, 0),
        window_end=time(18, 0),
    )
    assert [slot.time for slot in slots] == ["17:00", "17:30"]


@pytest.mark.asyncio
async def test_fully_booked_day_returns_empty() -> None:
    finder = _finder([appointment("A", "2024-06-10", "07:00", 12 * 60)])
    assert await finder.find_slots(DAY, 30, "dr-1") == []


@pytest.mark.asyncio
async def test_without_professional_returns_no_suggestions() -> None:
    assert await _finder().find_slots(DAY, 30, None) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("cap", [0, -1])
async def test_non_positive_cap_returns_empty(cap: int) -> None:
    assert await _finder().find_slots(DAY, 30, "dr-1", cap=cap) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(("duration", "granularity"), [(0, 30), (-15, 30), (30, 0)])
async def test_invalid_duration_or_granularity_raises(duration: int, granularity: int) -> None:
    with pytest.raises(InvalidIntervalError):
        await _finder().find_slots(DAY, duration, "dr-1", granularity_minutes=granularity)
