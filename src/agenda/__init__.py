"""Agenda — motor de disponibilidade e layout de consultas da clinica.

Subpastas:
- domain/: modelos (intervalos, consultas, eventos externos, resultados)
- protocols/: contratos com colaboradores (repositorio, calendarios, config)
- services/: politica de expediente, conflitos, slots, layout e fachada
- infra/: implementacoes concretas de IO (Google Calendar, caches, stores)
- bootstrap/: composition root
- observability/: correlation_id e metricas via logs estruturados

Padrao: services decidem sobre snapshots; infra busca; bootstrap conecta.
"""
