"""Text to Image Generator - FastAPI REST API layer.

This package contains the FastAPI application and the Pydantic
request/response models of the generation endpoint.

Modules
-------
main
    Application factory, routes, and the ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
"""
