"""Pydantic request and response models for the generation API.

These models define the JSON schema of ``POST /api/generate``.  FastAPI uses
them for request validation, serialisation, and OpenAPI documentation.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``: the prompt to render.
GenerateResponse
    Success body: ``{"imageUrl": "..."}``.
ErrorResponse
    Failure body: ``{"error": "..."}``.  Every error the API returns uses
    this shape, including validation failures.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: Text description of the image to generate.  Must contain
            at least one non-whitespace character; blank prompts are
            rejected by the route with a 400.
    """

    prompt: str = Field(
        ...,
        description="Text description of the image to generate.",
    )


class GenerateResponse(BaseModel):
    """Success body for ``POST /api/generate``.

    The field is exposed as ``imageUrl`` on the wire.

    Attributes:
        image_url: URL or data URI of the generated image.
    """

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(
        ...,
        alias="imageUrl",
        description="URL or data URI of the generated image.",
    )


class ErrorResponse(BaseModel):
    """Failure body for every API error.

    Attributes:
        error: Human-readable message, shown to the user as is.
    """

    error: str = Field(
        ...,
        description="Human-readable error message.",
    )
