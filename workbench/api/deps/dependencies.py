"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: workbench.configs, workbench.application, workbench.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from workbench.application.services import GroupService, TranscriptService
from workbench.boundary.db import get_async_db
from workbench.boundary.http.clients import HttpClients
from workbench.configs import Settings, get_settings


class ServiceCache:
    """Container for process-wide client instances."""

    def __init__(self) -> None:
        self._http_clients: HttpClients | None = None

    @property
    def http_clients(self) -> HttpClients:
        """Get cached outbound HTTP clients."""
        if self._http_clients is None:
            self._http_clients = HttpClients(get_settings())
        return self._http_clients

    async def clear(self) -> None:
        """Close and drop all cached instances."""
        if self._http_clients is not None:
            await self._http_clients.aclose()
        self._http_clients = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_group_service(db: AsyncSession = Depends(get_async_db)) -> GroupService:
    """
    Get group service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        GroupService: Group service instance
    """
    return GroupService(db=db)


def get_transcript_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> TranscriptService:
    """
    Get transcript service instance wired to the cached HTTP clients.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        TranscriptService: Transcript service instance
    """
    clients = get_service_cache().http_clients
    return TranscriptService(
        db=db,
        providers=clients.providers,
        assistant_client=clients.assistant,
        email_client=clients.email,
        settings=settings.transcripts,
    )
