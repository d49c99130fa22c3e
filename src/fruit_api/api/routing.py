"""
Explicit route table.

Every endpoint the service exposes is listed in a module-level tuple of
RouteSpec (see api/v1/fruits.py and api/v1/hello.py) and registered in one
place by the app factory:

    register_routes(app, FRUIT_ROUTES + HELLO_ROUTES)
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteSpec:
    method: str
    path: str
    endpoint: Callable[..., Any]
    name: str
    status_code: int | None = None


def register_routes(app: FastAPI, routes: Iterable[RouteSpec]) -> None:
    for route in routes:
        app.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            name=route.name,
            status_code=route.status_code,
        )
        logger.debug("route.registered", extra={"method": route.method, "path": route.path, "route": route.name})
