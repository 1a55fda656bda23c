"""Stores — implementacoes concretas de leitura de agenda e expediente.

Modulos disponiveis:
    - memory_stores: consultas, integracoes e expediente em memoria (dev/test)
    - yaml_working_hours: expediente por clinica lido de YAML com TTL
"""

from __future__ import annotations

from agenda.infra.stores.memory_stores import (
    MemoryAppointmentRepository,
    MemoryIntegrationStore,
    MemoryWorkingHoursProvider,
)
from agenda.infra.stores.yaml_working_hours import YamlWorkingHoursProvider

__all__ = [
    # Memory (dev/test)
    "MemoryAppointmentRepository",
    "MemoryIntegrationStore",
    "MemoryWorkingHoursProvider",
    # YAML
    "YamlWorkingHoursProvider",
]
