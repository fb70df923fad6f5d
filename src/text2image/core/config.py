"""Configuration management for Text to Image Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the TEXT2IMAGE_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (TEXT2IMAGE_* prefix)
2. .env file in the project root
3. Default values defined in Text2ImageConfig

Example .env file:
    TEXT2IMAGE_PROVIDER_API_KEY=sk-...
    TEXT2IMAGE_PROVIDER_MODEL=dall-e-3
    TEXT2IMAGE_SERVER_PORT=7860
    TEXT2IMAGE_ENDPOINT_URL=http://127.0.0.1:7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from text2image.core.config import config

    print(config.endpoint_url)
    print(config.provider_model)

Two Sides of the Request
------------------------
The same process plays both roles of the generation round trip:

- The form controller (``text2image.ui``) posts prompts to ``endpoint_url``.
  By default this is the local server itself.
- The generation endpoint (``text2image.api``) forwards prompts to the
  upstream image provider at ``provider_url``.
"""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Text2ImageConfig(BaseSettings):
    """Main configuration for Text to Image Generator.

    Values are loaded from environment variables with the TEXT2IMAGE_ prefix,
    with fallback to the defaults defined here.

    Attributes
    ----------
    Server Settings:
        server_host : str
            uvicorn bind address (0.0.0.0 for local network)
        server_port : int
            uvicorn port (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level applied by the entry point

    Form Controller Settings:
        endpoint_url : str
            Base URL that hosts ``POST /api/generate``.  Defaults to this
            server on 127.0.0.1 at ``server_port``
        request_timeout : float
            Timeout in seconds for one generation request

    Provider Settings:
        provider_url : str
            Upstream image generation API (OpenAI images compatible)
        provider_api_key : str
            Bearer token sent to the provider
        provider_model : str
            Model name sent to the provider
        image_size : str
            Requested image size, WIDTHxHEIGHT
        response_format : Literal["url", "b64_json"]
            Whether the provider returns a hosted URL or inline base64

    Examples
    --------
        >>> custom_config = Text2ImageConfig(
        ...     endpoint_url="http://localhost:8000",
        ...     response_format="b64_json",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TEXT2IMAGE_",
        case_sensitive=False,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    # Form controller settings
    endpoint_url: str = Field(
        default="",
        description="Base URL the form posts generation requests to (blank: this server)",
    )
    request_timeout: float = Field(
        default=120.0,
        description="Timeout in seconds for a generation request",
        gt=0,
    )

    # Upstream provider settings
    provider_url: str = Field(
        default="https://api.openai.com/v1/images/generations",
        description="Upstream image generation API",
    )
    provider_api_key: str = Field(
        default="",
        description="Bearer token for the upstream provider",
    )
    provider_model: str = Field(
        default="dall-e-3",
        description="Model name sent to the upstream provider",
    )
    image_size: str = Field(
        default="1024x1024",
        description="Requested image size (WIDTHxHEIGHT)",
        pattern=r"^\d+x\d+$",
    )
    response_format: Literal["url", "b64_json"] = Field(
        default="url",
        description="Provider response format (hosted URL or inline base64)",
    )

    @model_validator(mode="after")
    def default_endpoint_to_local_server(self) -> "Text2ImageConfig":
        """Point the form at this server when no endpoint is configured."""
        if not self.endpoint_url:
            self.endpoint_url = f"http://127.0.0.1:{self.server_port}"
        return self


# Global configuration instance
# Loads values from environment variables (TEXT2IMAGE_* prefix) and .env file.
config = Text2ImageConfig()
