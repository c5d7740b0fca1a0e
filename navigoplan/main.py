# path: navigoplan-api/navigoplan/main.py

from __future__ import annotations

from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from navigoplan.core.config import Settings, init_logging, settings as default_settings
from navigoplan.services.port_catalog import PortCatalogCache
from navigoplan.api.routes.health import router as health_router
from navigoplan.api.routes.itineraries import router as itineraries_router
from navigoplan.api.routes.ports import router as ports_router

log = logging.getLogger("navigoplan")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    init_logging(settings.LOG_LEVEL)
    app = FastAPI(title="navigoplan-api")

    app.state.settings = settings
    app.state.catalog_cache = PortCatalogCache(settings.PORTS_CANONICAL_PATH, settings.PORTS_SEAGUIDE_PATH)

    allow_origins = (
        [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
        if settings.CORS_ALLOW_ORIGINS != "*"
        else ["*"]
    )
    app.add_middleware(CORSMiddleware, allow_origins=allow_origins, allow_methods=["*"], allow_headers=["*"])

    app.include_router(health_router)
    app.include_router(ports_router)
    app.include_router(itineraries_router)

    log.info("navigoplan-api ready (canonical=%s, seaguide=%s)", settings.PORTS_CANONICAL_PATH, settings.PORTS_SEAGUIDE_PATH)
    return app


app = create_app()
