"""
FastAPI dependencies. The collaborators are built once by create_app() and
kept on app.state, so tests can swap them on a fresh app.
"""
from fastapi import Request

from fruit_api.services.fruit_handler import FruitHandler
from fruit_api.services.greeting import GreetingService


def get_fruit_handler(request: Request) -> FruitHandler:
    return request.app.state.fruit_handler


def get_greeting_service(request: Request) -> GreetingService:
    return request.app.state.greeting_service
