"""Fachada de disponibilidade consumida pela agenda (UI/API).

Operacoes:
- check_availability: intervalo livre para o profissional? (locais + externos)
- find_available_slots: proximos horarios livres do dia
- analyze_slot: classificacao rapida de celula (somente dados locais)
- compute_day_layout: lanes de consultas simultaneas
- handle: check_availability sequenciado (descarte de respostas obsoletas)
"""

from __future__ import annotations

import logging
import time as perf
from datetime import date, datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from agenda.domain.appointment import TimeInterval, localize
from agenda.domain.conflict import AvailabilityResult
from agenda.domain.working_hours import WorkingHoursConfig
from agenda.observability import (
    correlation_scope,
    get_correlation_id,
    record_conflict,
    record_latency,
)
from agenda.services.availability_requests import AvailabilityResponse
from agenda.services.collision_layout import CollisionLayoutEngine
from agenda.services.slot_finder import SlotFinder
from agenda.services.time_slot_analyzer import TimeSlotAnalyzer
from config.logging import log_fallback
from config.settings import SchedulingSettings

if TYPE_CHECKING:
    from collections.abc import Iterable

    from agenda.domain.appointment import Appointment
    from agenda.domain.layout import LayoutAssignment
    from agenda.domain.slots import SlotAnalysis, SlotSuggestion
    from agenda.protocols.appointment_repository import AppointmentRepositoryProtocol
    from agenda.protocols.layout_cache import LayoutCacheProtocol
    from agenda.protocols.working_hours_provider import WorkingHoursConfigProviderProtocol
    from agenda.services.availability_requests import AvailabilityRequest
    from agenda.services.conflict_detector import ConflictDetector

logger = logging.getLogger(__name__)

_COMPONENT = "availability_service"


class AvailabilityService:
    __slots__ = (
        "_analyzer",
        "_config_provider",
        "_detector",
        "_layout_engine",
        "_repository",
        "_settings",
        "_slot_finder",
        "_zone",
    )

    def __init__(
        self,
        *,
        detector: ConflictDetector,
        repository: AppointmentRepositoryProtocol,
        working_hours_provider: WorkingHoursConfigProviderProtocol | None = None,
        settings: SchedulingSettings | None = None,
        layout_cache: LayoutCacheProtocol | None = None,
    ) -> None:
        self._settings = settings or SchedulingSettings()
        self._zone: tzinfo = ZoneInfo(self._settings.calendar_timezone)
        self._detector = detector
        self._repository = repository
        self._config_provider = working_hours_provider
        self._slot_finder = SlotFinder(detector, zone=self._zone)
        self._analyzer = TimeSlotAnalyzer(
            cell_minutes=self._settings.slot_cell_minutes,
            zone=self._zone,
        )
        self._layout_engine = CollisionLayoutEngine(
            gap=self._settings.lane_gap_percent,
            zone=self._zone,
            cache=layout_cache,
        )

    @property
    def zone(self) -> tzinfo:
        return self._zone

    async def check_availability(
        self,
        start: datetime,
        end: datetime,
        professional_id: str | None = None,
        exclude_appointment_id: str | None = None,
    ) -> AvailabilityResult:
        """Checa o intervalo [start, end).

        Horarios naive sao lidos no fuso da clinica.

        Args:
            start: Inicio do intervalo.
            end: Fim do intervalo (exclusivo).
            professional_id: Profissional da consulta; obrigatorio por padrao.
            exclude_appointment_id: Consulta ignorada (reagendamento).

        Returns:
            AvailabilityResult com `conflict` e detalhes do primeiro conflito.

        Raises:
            InvalidIntervalError: end <= start (antes de qualquer consulta).
        """
        interval = TimeInterval(
            start=localize(start, self._zone),
            end=localize(end, self._zone),
        )
        started = perf.perf_counter()
        result = await self._detector.check(interval, professional_id, exclude_appointment_id)
        record_latency(_COMPONENT, "check_availability", (perf.perf_counter() - started) * 1000)
        record_conflict(result.kind)
        return AvailabilityResult.from_conflict(result)

    async def handle(self, request: AvailabilityRequest) -> AvailabilityResponse:
        """check_availability sob um correlation_id proprio da requisicao."""
        with correlation_scope():
            result = await self.check_availability(
                request.start,
                request.end,
                request.professional_id,
                request.exclude_appointment_id,
            )
        return AvailabilityResponse(request=request, result=result)

    async def find_available_slots(
        self,
        day: date,
        duration_minutes: int | None = None,
        professional_id: str | None = None,
        *,
        granularity_minutes: int | None = None,
        window_start: time | None = None,
        window_end: time | None = None,
        cap: int | None = None,
        clinic_id: str | None = None,
        respect_clinic_hours: bool = False,
    ) -> list[SlotSuggestion]:
        """Proximos horarios livres do dia (locais + externos).

        Args:
            day: Dia da busca, no fuso da clinica.
            duration_minutes: Duracao da consulta; default de settings.
            professional_id: Profissional cuja agenda e consultada.
            granularity_minutes: Passo entre candidatos; default de settings.
            window_start: Inicio da janela de busca; default de settings.
            window_end: Fim da janela (so o inicio precisa caber).
            cap: Maximo de sugestoes devolvidas.
            clinic_id: Clinica cujo expediente e aplicado.
            respect_clinic_hours: Descarta dia nao util, almoco e fora do
                expediente da clinica. Desligado por padrao.

        Returns:
            Sugestoes em ordem cronologica, no maximo `cap`.

        Raises:
            InvalidIntervalError: Duracao ou granularidade nao positivas.
            ValueError: `respect_clinic_hours` sem `clinic_id`.
        """
        settings = self._settings
        config: WorkingHoursConfig | None = None
        if respect_clinic_hours:
            if clinic_id is None:
                msg = "clinic_id obrigatorio com respect_clinic_hours"
                raise ValueError(msg)
            config = await self._load_config(clinic_id)
        started = perf.perf_counter()
        slots = await self._slot_finder.find_slots(
            day,
            duration_minutes if duration_minutes is not None else settings.default_duration_min,
            professional_id,
            granularity_minutes=(
                granularity_minutes
                if granularity_minutes is not None
                else settings.slot_granularity_min
            ),
            window_start=window_start if window_start is not None else settings.slot_window_start,
            window_end=window_end if window_end is not None else settings.slot_window_end,
            cap=cap if cap is not None else settings.slot_suggestion_cap,
            config=config,
        )
        record_latency(_COMPONENT, "find_available_slots", (perf.perf_counter() - started) * 1000)
        return slots

    async def analyze_slot(
        self,
        day: date,
        hour: int,
        minute: int,
        *,
        clinic_id: str,
        professional_id: str | None = None,
        appointments: Iterable[Appointment] | None = None,
    ) -> SlotAnalysis:
        """Classifica a celula (day, hour:minute) da grade.

        Usa somente dados locais; agenda externa fica para check_availability.

        Args:
            day: Dia da celula.
            hour: Hora da celula.
            minute: Minuto da celula.
            clinic_id: Clinica cujo expediente e aplicado (fail-open).
            professional_id: Filtra consultas de um profissional.
            appointments: Consultas ja carregadas; sem elas, consulta o repositorio.

        Returns:
            SlotAnalysis com clicabilidade, aviso e texto de detalhe.
        """
        config = await self._load_config(clinic_id)
        if appointments is None:
            day_start = datetime.combine(day, time(0, 0), tzinfo=self._zone)
            appointments = await self._repository.query_range(
                day_start,
                day_start + timedelta(days=1),
                professional_id,
            )
        return self._analyzer.analyze(day, hour, minute, appointments, config, professional_id)

    def compute_day_layout(
        self,
        day: date,
        appointments: Iterable[Appointment],
    ) -> dict[str, LayoutAssignment]:
        """Lanes das consultas do dia, com cache consultivo por snapshot."""
        started = perf.perf_counter()
        layout = self._layout_engine.layout(day, appointments)
        record_latency(_COMPONENT, "compute_day_layout", (perf.perf_counter() - started) * 1000)
        return layout

    async def _load_config(self, clinic_id: str) -> WorkingHoursConfig:
        if self._config_provider is None:
            return WorkingHoursConfig()
        try:
            return await self._config_provider.get(clinic_id)
        except Exception as exc:
            log_fallback(
                logger,
                _COMPONENT,
                reason="working_hours_unavailable",
                error_type=type(exc).__name__,
                correlation_id=get_correlation_id(),
            )
            return WorkingHoursConfig()


__all__ = ["AvailabilityService"]
