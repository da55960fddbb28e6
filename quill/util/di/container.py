"""Dependency injection container."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container

from quill.config import Settings
from quill.util.di import PROVIDERS, get_provider
from quill.util.logging import setup_logging
from quill.util.observability import configure_logfire


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)


@asynccontextmanager
async def lifespan() -> AsyncIterator[AsyncContainer]:
    """Run the engine for the lifetime of the host process.

    Configures logging and logfire, yields the container and closes it on
    exit, which disposes the database engine.

    Usage:
        async with lifespan() as container:
            async with container() as request:
                use_case = await request.get(ListPostsUseCase)
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    container = create_container()
    try:
        yield container
    finally:
        await container.close()
