"""Image generation backends for the ``/api/generate`` endpoint.

The endpoint never talks to a model directly.  It hands the prompt to an
:class:`ImageBackend` and relays the returned image reference to the form.
Backends are swapped at application startup (see
:func:`text2image.api.main.create_app`), which keeps the API layer free of
provider details and lets tests plug in a fake.

Image References
----------------
``generate()`` returns a string the browser can display directly:

- a hosted URL (``https://...``) when the provider stores the image, or
- a ``data:image/png;base64,...`` URI when the provider returns inline bytes.

Usage
-----
::

    from text2image.core.backend import HttpImageBackend
    from text2image.core.config import config

    backend = HttpImageBackend(config)
    url = await backend.generate("a goblin workshop")
    await backend.aclose()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from text2image.core.config import Text2ImageConfig

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised when the upstream provider cannot produce an image.

    The message is safe to show to the user.

    Attributes:
        status_code: HTTP status the API layer should answer with.
    """

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code


class ImageBackend(ABC):
    """Interface for anything that turns a prompt into an image reference."""

    name: str = "Base Image Backend"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Generate one image for *prompt*.

        Args:
            prompt: The user's prompt, already validated as non-blank.

        Returns:
            A URL or data URI referencing the generated image.

        Raises:
            BackendError: If the image could not be generated.
        """

    async def aclose(self) -> None:
        """Release any resources held by the backend."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class HttpImageBackend(ImageBackend):
    """Backend for OpenAI-images-compatible HTTP providers.

    Sends ``{"model", "prompt", "n", "size", "response_format"}`` to
    ``config.provider_url`` and reads the first entry of the ``data`` list
    in the response.

    Args:
        config: Application configuration (provider URL, key, model, size).
        transport: Optional httpx transport, used by tests to fake the
            provider.
    """

    name = "HTTP Image Provider"

    def __init__(
        self,
        config: Text2ImageConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        headers = {"Content-Type": "application/json"}
        if config.provider_api_key:
            headers["Authorization"] = f"Bearer {config.provider_api_key}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=config.request_timeout,
            transport=transport,
        )

    async def generate(self, prompt: str) -> str:
        payload = {
            "model": self.config.provider_model,
            "prompt": prompt,
            "n": 1,
            "size": self.config.image_size,
            "response_format": self.config.response_format,
        }
        logger.info(f"Requesting image from provider (model={self.config.provider_model})")

        try:
            response = await self._client.post(self.config.provider_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Provider request failed: {e}")
            raise BackendError(f"Image provider unreachable: {e}") from e

        if response.is_error:
            raise _provider_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise BackendError("Image provider returned an invalid response") from e

        return _extract_image_reference(data)

    async def aclose(self) -> None:
        await self._client.aclose()


def _provider_error(response: httpx.Response) -> BackendError:
    """Map a failed provider response to a user-facing :class:`BackendError`.

    Prefers the provider's own ``error.message``; content-policy rejections
    become a 422 so the user knows rephrasing may help.
    """
    try:
        payload = response.json()
    except ValueError:
        return BackendError(f"Image provider error ({response.status_code})")

    error_obj = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error_obj, str) and error_obj:
        return BackendError(error_obj)
    if isinstance(error_obj, dict):
        message = error_obj.get("message") or ""
        code = error_obj.get("code") or ""
        if "content_policy" in code or "safety" in message.lower():
            return BackendError(
                "Your prompt was blocked by the safety filter. Try rephrasing your description.",
                status_code=422,
            )
        if message:
            return BackendError(message)

    return BackendError(f"Image provider error ({response.status_code})")


def _extract_image_reference(data) -> str:
    """Pull the image URL (or build a data URI) out of a provider response."""
    items = data.get("data") if isinstance(data, dict) else None
    if not items or not isinstance(items[0], dict):
        raise BackendError("Image provider returned no images")

    first = items[0]
    if first.get("url"):
        return first["url"]
    if first.get("b64_json"):
        return f"data:image/png;base64,{first['b64_json']}"

    raise BackendError("Image provider returned no images")
