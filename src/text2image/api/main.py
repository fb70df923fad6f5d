"""Text to Image Generator - FastAPI Application.

This module is the single entry point for the web application.  It defines
the application factory, the REST routes, and the ``main()`` CLI function
that launches the uvicorn server.

Architecture
------------
- **The form** is a Gradio Blocks app (:mod:`text2image.ui.app`) mounted at
  ``/``.  Its controller posts prompts back to this server's
  ``/api/generate`` (``config.endpoint_url``).
- **Image generation** is delegated to an
  :class:`~text2image.core.backend.ImageBackend` created at startup and kept
  on ``app.state.backend``.
- **Errors** from every route are answered as ``{"error": "<message>"}``,
  the one failure shape the form understands.

Endpoints
---------
========  ====================  ====================================
Method    Path                  Purpose
========  ====================  ====================================
GET       ``/``                 Prompt form (Gradio)
POST      ``/api/generate``     Generate one image for a prompt
GET       ``/api/health``       Liveness and version
========  ====================  ====================================

Usage
-----
CLI (installed entry point)::

    text2image

Direct invocation::

    python -m text2image.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from text2image import __version__
from text2image.api.models import ErrorResponse, GenerateRequest, GenerateResponse
from text2image.core.backend import BackendError, HttpImageBackend, ImageBackend
from text2image.core.config import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Error normalisation.
#
# FastAPI answers errors as ``{"detail": ...}``; the form reads ``error``.
# ---------------------------------------------------------------------------


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render an :class:`HTTPException` as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a request validation failure as ``{"error": "<field>: <msg>"}``.

    Only the first error is reported; the form shows a single message.
    """
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=422, content={"error": "Invalid request"})

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(status_code=422, content={"error": message})


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def generate_image(req: GenerateRequest, request: Request) -> GenerateResponse:
    """Generate one image for the submitted prompt.

    Args:
        req: Validated :class:`GenerateRequest` payload.
        request: Incoming request, used to reach ``app.state.backend``.

    Returns:
        :class:`GenerateResponse`, serialised as ``{"imageUrl": ...}``.

    Raises:
        HTTPException: 400 for a blank prompt; the backend's status
            (502 by default) when generation fails.
    """
    if not req.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    backend: ImageBackend = request.app.state.backend
    logger.info(f"Generating image with {backend!r} ({len(req.prompt)} chars)")

    try:
        image_url = await backend.generate(req.prompt)
    except BackendError as e:
        logger.warning(f"Image generation failed: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e)) from e

    return GenerateResponse(image_url=image_url)


@router.get("/health")
async def health() -> dict:
    """Return service liveness and version.

    Returns:
        Dictionary with ``status`` and ``version``.
    """
    return {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(backend: ImageBackend | None = None, mount_ui: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        backend: Image backend to serve ``/api/generate`` with.  Defaults to
            an :class:`HttpImageBackend` built from the global config at
            startup.
        mount_ui: Mount the Gradio prompt form at ``/``.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Create the image backend on startup and close it on shutdown."""
        # --- Startup -------------------------------------------------------
        app.state.backend = backend if backend is not None else HttpImageBackend(config)
        logger.info(f"Image backend ready: {app.state.backend!r}")

        yield  # Application runs here.

        # --- Shutdown ------------------------------------------------------
        await app.state.backend.aclose()
        logger.info("Image backend closed on shutdown.")

    app = FastAPI(
        title="Text to Image Generator",
        description="Prompt form and image generation API.",
        version=__version__,
        lifespan=lifespan,
    )

    # Allow cross-origin requests so the form can be served from a different
    # port during development.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)

    if mount_ui:
        # Imported here so API-only use does not pay for Gradio.
        import gradio as gr

        from text2image.ui.app import create_ui

        app = gr.mount_gradio_app(app, create_ui(), path="/")

    return app


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port, and log level from
    :data:`~text2image.core.config.config` (``TEXT2IMAGE_SERVER_HOST``,
    ``TEXT2IMAGE_SERVER_PORT``, ``TEXT2IMAGE_LOG_LEVEL``).  Defaults to
    ``0.0.0.0:7860``.

    This function is registered as the ``text2image`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting Text to Image Generator on {config.server_host}:{config.server_port}")
    logger.info(f"Form posts to {config.endpoint_url}, provider {config.provider_url}")

    uvicorn.run(
        "text2image.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
