"""Testes da visao consolidada do dia (locais + calendario externo)."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from agenda.domain import Appointment, AppointmentOrigin, ExternalEvent
from agenda.infra.stores import MemoryAppointmentRepository, MemoryIntegrationStore
from agenda.services import DayAgendaService, compute_layout
from tests.fakes.builders import TZ, appointment, at, external_event, integration
from tests.fakes.fake_calendar_adapter import FakeCalendarAdapter
from utils.errors import ExternalSourceUnavailableError

DAY = date(2024, 6, 10)
ISO_DAY = "2024-06-10"


def _service(appointments=(), events=None, failures=None, integrations=None):
    store = MemoryIntegrationStore(integrations or [integration("i1")])
    service = DayAgendaService(
        repository=MemoryAppointmentRepository(appointments),
        integration_store=store,
        calendar_adapter=FakeCalendarAdapter(events or {}, failures=failures),
        zone=TZ,
    )
    return service, store


@pytest.mark.asyncio
async def test_merges_external_events_as_appointments() -> None:
    service, _ = _service(
        [appointment("1", ISO_DAY, "10:00")],
        {"i1": [external_event("evt", ISO_DAY, "08:00", "08:45", title="Reuniao")]},
    )
    day = await service.build_day(DAY, "dr-1")
    assert [item.id for item in day] == ["gc_evt", "1"]
    external = day[0]
    assert external.origin is AppointmentOrigin.EXTERNAL
    assert external.external_event_id == "evt"
    assert external.duration_minutes == 45
    assert external.title == "Reuniao"


@pytest.mark.asyncio
async def test_mirrored_events_are_not_duplicated() -> None:
    service, _ = _service(
        [appointment("1", ISO_DAY, "10:00", external_event_id="evt")],
        {"i1": [external_event("evt", ISO_DAY, "10:00", "11:00")]},
    )
    day = await service.build_day(DAY, "dr-1")
    assert [item.id for item in day] == ["1"]


@pytest.mark.asyncio
async def test_local_appointments_keep_every_status() -> None:
    service, _ = _service([appointment("1", ISO_DAY, "10:00", status="cancelada_paciente")])
    day = await service.build_day(DAY, "dr-1")
    assert [item.status for item in day] == ["cancelada_paciente"]


@pytest.mark.asyncio
async def test_failing_integration_is_tolerated_and_marked() -> None:
    service, store = _service(
        [appointment("1", ISO_DAY, "10:00")],
        failures={"i1": ExternalSourceUnavailableError("i1", "http_401", requires_reauth=True)},
    )
    day = await service.build_day(DAY, "dr-1")
    assert [item.id for item in day] == ["1"]
    assert store.get("i1").sync_enabled is False


@pytest.mark.asyncio
async def test_same_event_from_two_integrations_appears_once() -> None:
    event = external_event("shared", ISO_DAY, "15:00", "16:00")
    service, _ = _service(
        events={"i1": [event], "i2": [event]},
        integrations=[integration("i1"), integration("i2")],
    )
    day = await service.build_day(DAY, "dr-1")
    assert [item.id for item in day] == ["gc_shared"]


@pytest.mark.asyncio
async def test_output_feeds_layout() -> None:
    service, _ = _service(
        [appointment("1", ISO_DAY, "09:00")],
        {"i1": [external_event("evt", ISO_DAY, "09:30", "10:30")]},
    )
    day = await service.build_day(DAY, "dr-1")
    layout = compute_layout(DAY, day, zone=TZ)
    assert layout["1"].group_index == layout["gc_evt"].group_index
    assert layout["gc_evt"].left_percent > layout["1"].left_percent
    assert day[0].scheduled_start == at(ISO_DAY, "09:00")


@pytest.mark.asyncio
async def test_without_calendar_adapter_returns_local_only() -> None:
    service = DayAgendaService(
        repository=MemoryAppointmentRepository([appointment("1", ISO_DAY, "10:00")]),
        zone=TZ,
    )
    assert [item.id for item in await service.build_day(DAY)] == ["1"]


@pytest.mark.asyncio
async def test_naive_rows_and_events_are_read_in_clinic_zone() -> None:
    row = Appointment.model_validate(
        {"id": 1, "professional_id": "dr-1", "scheduled_start": "2024-06-10T10:00:00"}
    )
    event = ExternalEvent(
        id="evt",
        start=datetime(2024, 6, 10, 8, 0),
        end=datetime(2024, 6, 10, 8, 30),
    )
    service, _ = _service([row, appointment("2", ISO_DAY, "09:00")], {"i1": [event]})
    day = await service.build_day(DAY, "dr-1")
    assert [item.id for item in day] == ["gc_evt", "2", "1"]
    assert day[0].scheduled_start == at(ISO_DAY, "08:00")
    assert day[0].duration_minutes == 30
    assert day[2].scheduled_start == at(ISO_DAY, "10:00")
