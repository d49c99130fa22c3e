"""
Plain-text liveness endpoints.
"""
from fastapi import Depends
from fastapi.responses import PlainTextResponse

from fruit_api.api.dependencies import get_greeting_service
from fruit_api.api.routing import RouteSpec
from fruit_api.services.greeting import GreetingService


async def hello() -> PlainTextResponse:
    return PlainTextResponse("Hello from FastAPI")


async def greeting(name: str, service: GreetingService = Depends(get_greeting_service)) -> PlainTextResponse:
    return PlainTextResponse(service.greeting(name))


HELLO_ROUTES = (
    RouteSpec("GET", "/hello", hello, "hello"),
    RouteSpec("GET", "/hello/greeting/{name}", greeting, "hello_greeting"),
)
