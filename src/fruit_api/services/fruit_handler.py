"""
Fruit operations: validate the request, run the unit of work inside a session
scope, and return an explicit Outcome.

Reads use read_session; writes use transaction, which commits on success and
rolls back on every failure path before the failure propagates.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fruit_api.database.transaction import read_session, transaction
from fruit_api.exceptions.base import ValidationError
from fruit_api.repositories.fruit_repository import FruitRepository
from fruit_api.schemas.fruit import FruitPayload, FruitRead
from fruit_api.services.outcomes import Outcome

logger = logging.getLogger(__name__)

MODEL_NAME = "Fruit"


class FruitHandler:
    """
    Stateless apart from the session factory, so one instance serves all
    requests; each call opens its own session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_fruits(self) -> Outcome:
        async with read_session(self.session_factory, MODEL_NAME) as session:
            fruits = await FruitRepository(session).list_by_name()
            return Outcome.ok([FruitRead.model_validate(f) for f in fruits])

    async def get_fruit(self, fruit_id: int) -> Outcome:
        async with read_session(self.session_factory, MODEL_NAME) as session:
            fruit = await FruitRepository(session).get_by_id(fruit_id)
            if fruit is None:
                return Outcome.not_found()
            return Outcome.ok(FruitRead.model_validate(fruit))

    async def create_fruit(self, payload: FruitPayload | None) -> Outcome:
        """
        Raises:
            ValidationError: no body, or the body carries an id
            DuplicateError: the name is taken
        """
        if payload is None:
            raise ValidationError("Fruit was not set on request.")
        if payload.id is not None:
            raise ValidationError("Id was invalidly set on request.", fields=["id"])

        async with transaction(self.session_factory, MODEL_NAME) as session:
            fruit = await FruitRepository(session).create_fruit(name=payload.name)
            body = FruitRead.model_validate(fruit)

        logger.info("fruit.created", extra={"fruit_id": body.id})
        return Outcome.created(body)

    async def update_fruit(self, fruit_id: int, payload: FruitPayload | None) -> Outcome:
        """
        Rename the fruit with `fruit_id`. An id in the body is ignored: the path wins.

        Raises:
            ValidationError: no body, or no name in it
            DuplicateError: the new name belongs to another fruit
        """
        if payload is None or payload.name is None:
            raise ValidationError("Fruit name was not set on request.", fields=["name"])

        async with transaction(self.session_factory, MODEL_NAME) as session:
            fruit = await FruitRepository(session).get_by_id(fruit_id)
            if fruit is None:
                return Outcome.not_found()
            fruit.name = payload.name
            # a name taken by another fruit fails here and is mapped to DuplicateError
            await session.flush()
            body = FruitRead.model_validate(fruit)

        logger.info("fruit.updated", extra={"fruit_id": fruit_id})
        return Outcome.ok(body)

    async def delete_fruit(self, fruit_id: int) -> Outcome:
        async with transaction(self.session_factory, MODEL_NAME) as session:
            removed = await FruitRepository(session).delete(fruit_id)

        if not removed:
            return Outcome.not_found()
        logger.info("fruit.deleted", extra={"fruit_id": fruit_id})
        return Outcome.deleted()
