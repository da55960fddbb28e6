"""Dashboard use cases."""

from .get_activity import (
    GetActivityResponse,
    GetActivityUseCase,
    GetDashboardStatsResponse,
    GetDashboardStatsUseCase,
)
from .reconcile_counters import (
    ReconcileCountersRequest,
    ReconcileCountersResponse,
    ReconcileCountersUseCase,
)

__all__ = [
    "GetActivityResponse",
    "GetActivityUseCase",
    "GetDashboardStatsResponse",
    "GetDashboardStatsUseCase",
    "ReconcileCountersRequest",
    "ReconcileCountersResponse",
    "ReconcileCountersUseCase",
]
