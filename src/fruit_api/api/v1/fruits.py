"""
/fruits endpoints. Each one delegates to the FruitHandler and renders the
returned Outcome; failures propagate to the registered exception handlers.
"""
from fastapi import Body, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from fruit_api.api.dependencies import get_fruit_handler
from fruit_api.api.routing import RouteSpec
from fruit_api.schemas.fruit import FruitPayload
from fruit_api.services.fruit_handler import FruitHandler
from fruit_api.services.outcomes import Outcome


def render_outcome(outcome: Outcome) -> Response:
    if outcome.has_body:
        return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(outcome.body))
    # 204 and 404 carry no body
    return Response(status_code=outcome.status_code)


async def list_fruits(handler: FruitHandler = Depends(get_fruit_handler)) -> Response:
    return render_outcome(await handler.list_fruits())


async def get_fruit(id: int, handler: FruitHandler = Depends(get_fruit_handler)) -> Response:
    return render_outcome(await handler.get_fruit(id))


async def create_fruit(
    payload: FruitPayload | None = Body(default=None),
    handler: FruitHandler = Depends(get_fruit_handler),
) -> Response:
    return render_outcome(await handler.create_fruit(payload))


async def update_fruit(
    id: int,
    payload: FruitPayload | None = Body(default=None),
    handler: FruitHandler = Depends(get_fruit_handler),
) -> Response:
    return render_outcome(await handler.update_fruit(id, payload))


async def delete_fruit(id: int, handler: FruitHandler = Depends(get_fruit_handler)) -> Response:
    return render_outcome(await handler.delete_fruit(id))


FRUIT_ROUTES = (
    RouteSpec("GET", "/fruits", list_fruits, "list_fruits"),
    RouteSpec("GET", "/fruits/{id}", get_fruit, "get_fruit"),
    RouteSpec("POST", "/fruits", create_fruit, "create_fruit"),
    RouteSpec("PUT", "/fruits/{id}", update_fruit, "update_fruit"),
    RouteSpec("DELETE", "/fruits/{id}", delete_fruit, "delete_fruit"),
)
