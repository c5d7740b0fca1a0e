# path: navigoplan-api/navigoplan/api/deps.py

from __future__ import annotations

from fastapi import Request

from navigoplan.core.config import Settings
from navigoplan.services.port_catalog import PortCatalog


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> PortCatalog:
    return request.app.state.catalog_cache.get()
