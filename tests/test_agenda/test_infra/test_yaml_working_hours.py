"""Testes do provider de expediente em YAML."""

from __future__ import annotations

from datetime import time
from pathlib import Path

import pytest

from agenda.domain import Weekday, WorkingHoursConfig
from agenda.infra.stores import YamlWorkingHoursProvider

CLINICS_YAML = """
clinics:
  "1":
    working_days: [monday, tuesday, wednesday, thursday, friday]
    work_start: "08:00"
    work_end: "18:00"
    has_lunch_break: true
    lunch_start: 12:00
    lunch_end: 13:30
  "2": "nao e um mapa"
  "3":
    working_days: [funday]
"""


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "clinics.yaml"
    path.write_text(CLINICS_YAML, encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_loads_clinic_config(config_path: Path) -> None:
    config = await YamlWorkingHoursProvider(config_path).get("1")
    assert config.work_start == time(8, 0)
    assert config.work_end == time(18, 0)
    assert config.working_days is not None
    assert Weekday.SATURDAY not in config.working_days
    assert config.has_lunch_break is True


@pytest.mark.asyncio
async def test_unquoted_times_are_normalized(config_path: Path) -> None:
    config = await YamlWorkingHoursProvider(config_path).get("1")
    assert config.lunch_start == time(12, 0)
    assert config.lunch_end == time(13, 30)


@pytest.mark.asyncio
async def test_unknown_clinic_is_permissive(config_path: Path) -> None:
    assert await YamlWorkingHoursProvider(config_path).get("99") == WorkingHoursConfig()


@pytest.mark.asyncio
async def test_invalid_entries_fall_back_to_permissive(config_path: Path) -> None:
    provider = YamlWorkingHoursProvider(config_path)
    assert await provider.get("2") == WorkingHoursConfig()
    assert await provider.get("3") == WorkingHoursConfig()


@pytest.mark.asyncio
async def test_missing_file_is_permissive(tmp_path: Path) -> None:
    provider = YamlWorkingHoursProvider(tmp_path / "missing.yaml")
    assert await provider.get("1") == WorkingHoursConfig()


@pytest.mark.asyncio
async def test_invalid_yaml_is_permissive(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("clinics: [unterminated", encoding="utf-8")
    assert await YamlWorkingHoursProvider(path).get("1") == WorkingHoursConfig()


@pytest.mark.asyncio
async def test_reloads_after_ttl(config_path: Path) -> None:
    clock = FakeClock()
    provider = YamlWorkingHoursProvider(config_path, ttl_seconds=60, clock=clock)
    assert (await provider.get("1")).work_start == time(8, 0)

    config_path.write_text(
        'clinics:\n  "1":\n    work_start: "07:00"\n    work_end: "17:00"\n',
        encoding="utf-8",
    )
    clock.now = 30
    assert (await provider.get("1")).work_start == time(8, 0)
    clock.now = 61
    assert (await provider.get("1")).work_start == time(7, 0)


@pytest.mark.asyncio
async def test_invalidate_forces_reload(config_path: Path) -> None:
    provider = YamlWorkingHoursProvider(config_path)
    await provider.get("1")
    config_path.write_text("clinics: {}\n", encoding="utf-8")
    provider.invalidate()
    assert await provider.get("1") == WorkingHoursConfig()
