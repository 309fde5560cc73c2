"""FastAPI dependency providers."""

from workbench.api.deps.dependencies import (
    get_group_service,
    get_service_cache,
    get_settings_dependency,
    get_transcript_service,
)

__all__ = [
    "get_group_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_transcript_service",
]
