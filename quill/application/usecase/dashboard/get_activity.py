"""Dashboard activity and statistics use cases."""

import logfire
from pydantic import BaseModel

from quill.config import Settings
from quill.domain.model import ActivityEvent
from quill.domain.service import ActivityService, ContentStats


class GetActivityResponse(BaseModel):
    """Recent events, newest first."""

    events: list[ActivityEvent]


class GetActivityUseCase:
    """Use case for the merged activity feed."""

    def __init__(self, activity_service: ActivityService, settings: Settings) -> None:
        """Initialize get activity use case.

        Args:
            activity_service: Activity feed service
            settings: Application settings (feed sizes)
        """
        self.activity_service = activity_service
        self.settings = settings

    async def execute(self) -> GetActivityResponse:
        events = await self.activity_service.recent_activity(
            per_source=self.settings.activity.per_source,
            max_events=self.settings.activity.max_events,
        )
        return GetActivityResponse(events=events)


class GetDashboardStatsResponse(BaseModel):
    """Dashboard counters with the recent activity feed."""

    stats: ContentStats
    recent_activity: list[ActivityEvent]


class GetDashboardStatsUseCase:
    """Use case for the admin dashboard summary."""

    def __init__(self, activity_service: ActivityService, settings: Settings) -> None:
        """Initialize dashboard stats use case.

        Args:
            activity_service: Activity feed service
            settings: Application settings (stats window, feed sizes)
        """
        self.activity_service = activity_service
        self.settings = settings

    async def execute(self) -> GetDashboardStatsResponse:
        with logfire.span("dashboard_stats.execute"):
            since = self.activity_service.window_start(
                self.settings.content.stats_window_days
            )
            stats = await self.activity_service.stats(since)
            events = await self.activity_service.recent_activity(
                per_source=self.settings.activity.per_source,
                max_events=self.settings.activity.max_events,
            )
            return GetDashboardStatsResponse(stats=stats, recent_activity=events)
