"""
Application factory.

    app = create_app()                 # settings from env / .env
    app = create_app(Settings(...))    # explicit settings (tests)
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fruit_api.api.routing import register_routes
from fruit_api.api.v1.error_handlers import UnhandledErrorMiddleware, register_exception_handlers
from fruit_api.api.v1.fruits import FRUIT_ROUTES
from fruit_api.api.v1.hello import HELLO_ROUTES
from fruit_api.config.settings import Settings, get_settings
from fruit_api.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from fruit_api.database.session import create_engine_from_settings, create_schema, create_session_factory
from fruit_api.exceptions.translator import ErrorTranslator
from fruit_api.services.fruit_handler import FruitHandler
from fruit_api.services.greeting import GreetingService
from fruit_api.utils.project import get_project_name, get_project_version

logger = logging.getLogger(__name__)

ROUTES = FRUIT_ROUTES + HELLO_ROUTES


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.DB_CREATE_SCHEMA:
            await create_schema(engine)
        logger.info("app.startup", extra={"env": settings.ENV, "routes": len(ROUTES)})
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")
            stop_queue_logging()

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.fruit_handler = FruitHandler(session_factory)
    app.state.greeting_service = GreetingService()

    translator = ErrorTranslator()
    app.add_middleware(UnhandledErrorMiddleware, translator=translator)
    # added last, so it wraps the error middleware and every response gets the header
    app.add_middleware(RequestIDMiddleware)
    register_routes(app, ROUTES)
    register_exception_handlers(app, translator)
    return app
