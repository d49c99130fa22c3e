from pydantic import BaseModel, ConfigDict, Field

from fruit_api.models.fruit import NAME_MAX_LENGTH


class FruitPayload(BaseModel):
    """
    Request body for POST and PUT.

    Both fields are optional at the parsing level on purpose: a preset `id` on
    create and a missing `name` on update are rejected by the handler with a
    domain ValidationError rather than by request parsing.
    """
    id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)


class FruitRead(BaseModel):
    """Response body for a persisted fruit."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
