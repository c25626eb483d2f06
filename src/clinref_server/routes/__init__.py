"""Route registration — mounts all routers under ``/api/v1``."""

from fastapi import FastAPI

from clinref_server.routes.codes import router as codes_router
from clinref_server.routes.drugs import router as drugs_router
from clinref_server.routes.interactions import router as interactions_router
from clinref_server.routes.status import router as status_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the versioned API prefix."""
    app.include_router(codes_router, prefix=API_PREFIX)
    app.include_router(drugs_router, prefix=API_PREFIX)
    app.include_router(interactions_router, prefix=API_PREFIX)
    app.include_router(status_router, prefix=API_PREFIX)
