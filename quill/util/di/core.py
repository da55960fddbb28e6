"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from quill.config import Settings
from quill.domain.query import PostQueryBuilder
from quill.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_query_builder(self, settings: Settings) -> PostQueryBuilder:
        """Provide the post query builder with configured page limits."""
        return PostQueryBuilder(
            default_limit=settings.query.default_limit,
            max_limit=settings.query.max_limit,
        )
