"""Pydantic models for signaling requests and responses."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _scalar_to_text(value: object) -> object:
    """Render JSON scalars as strings; other values are left for validation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


ScalarText = Annotated[str | None, BeforeValidator(_scalar_to_text)]


class OfferRequest(BaseModel):
    """Body of a connection offer request."""

    model_config = ConfigDict(populate_by_name=True)

    connection_name: ScalarText = Field(default=None, alias="connectionName")
    password: ScalarText = None
    offer: ScalarText = None


class AnswerRequest(BaseModel):
    """Body of a connection answer request."""

    model_config = ConfigDict(populate_by_name=True)

    connection_name: ScalarText = Field(default=None, alias="connectionName")
    password: ScalarText = None
    answer: ScalarText = None


class SuccessResponse(BaseModel):
    """Envelope for a successful call."""

    success: bool = True
    data: str


class ErrorResponse(BaseModel):
    """Envelope for a failed call."""

    success: bool = False
    error: str
