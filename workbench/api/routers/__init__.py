"""API routers."""

from workbench.api.routers.groups import router as groups_router
from workbench.api.routers.health import router as health_router
from workbench.api.routers.metrics import router as metrics_router
from workbench.api.routers.transcripts import router as transcripts_router

__all__ = ["groups_router", "health_router", "metrics_router", "transcripts_router"]
