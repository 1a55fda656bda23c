"""Excecoes utilitarias compartilhadas."""

from .exceptions import (
    CacheBackendError,
    ExternalSourceUnavailableError,
    InfrastructureError,
    InvalidIntervalError,
    SchedulingError,
)

__all__ = [
    "CacheBackendError",
    "ExternalSourceUnavailableError",
    "InfrastructureError",
    "InvalidIntervalError",
    "SchedulingError",
]
