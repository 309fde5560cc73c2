"""HTTP API: FastAPI application, routers and dependency wiring."""
