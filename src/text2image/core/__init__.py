"""Core functionality for image generation.

- **Text2ImageConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **ImageBackend**: Interface the generation endpoint delegates to
- **HttpImageBackend**: Backend that forwards prompts to a hosted image API

Usage Example
-------------
    from text2image.core import HttpImageBackend, config

    backend = HttpImageBackend(config)
    image_url = await backend.generate("a beautiful landscape")
    await backend.aclose()
"""

from text2image.core.backend import BackendError, HttpImageBackend, ImageBackend
from text2image.core.config import Text2ImageConfig, config

__all__ = [
    "BackendError",
    "HttpImageBackend",
    "ImageBackend",
    "Text2ImageConfig",
    "config",
]
