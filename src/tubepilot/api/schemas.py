"""Pydantic schemas for API request/response models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

ProcessOutcome = Literal["completed", "budget_exhausted"]

SUCCESS_MESSAGE = "YouTube video processing completed."


class ProcessRequest(BaseModel):
    """Request to run the pipeline for a topic.

    ``topic`` is optional here so a missing value is reported as a
    bad request instead of a validation error. Numeric topics are
    accepted as their text form; any other non-string value counts as
    missing.
    """

    topic: str | None = Field(default=None, description="Search topic")

    @field_validator("topic", mode="before")
    @classmethod
    def coerce_topic(cls, value: Any) -> str | None:
        if isinstance(value, str):
            return value
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return None


class ProcessResponse(BaseModel):
    """Successful pipeline run."""

    message: str = SUCCESS_MESSAGE
    outcome: ProcessOutcome


class ErrorDetail(BaseModel):
    """Coarse error category returned to the caller."""

    error: str
    message: str


UNAUTHORIZED = ErrorDetail(error="Not authenticated", message="Authentication failed")
MISSING_TOPIC = ErrorDetail(error="Topic is required", message="Missing topic")
PROCESSING_ERROR = ErrorDetail(
    error="An error occurred during processing",
    message="Processing error",
)
