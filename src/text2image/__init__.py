"""Text to Image Generator - prompt form backed by an image generation API."""

__version__ = "0.1.0"

from text2image.core.config import Text2ImageConfig, config

__all__ = [
    "Text2ImageConfig",
    "config",
]
