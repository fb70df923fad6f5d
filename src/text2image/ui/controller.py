"""Prompt-to-image form controller.

The controller owns the four pieces of form state held in
:class:`~text2image.ui.models.FormState` and performs the one network round
trip of the application: ``POST /api/generate``.

Request Lifecycle
-----------------
Idle → Busy → (Success | Failed) → Idle, re-entrant on the next submit.

1. A blank prompt fails fast with ``"Please enter a prompt"``.  No request
   is made and nothing else changes.
2. Otherwise the result and error are cleared and ``busy`` is set.
3. The JSON body is parsed before the status is checked, so a failed
   response with an unparseable body reports the parse error.
4. A non-2xx response reports its ``error`` field, or
   ``"Failed to generate image"``.
5. Any other failure, transport and parse errors included, reports the
   exception message, or ``"An error occurred"`` when it has none.
6. ``busy`` is cleared on every exit path.

Server rejections and transport failures are shown to the user the same way.
Nothing is retried.

Each submission stamps ``FormState.request_seq``.  A request that settles
after a newer one has started leaves the state alone.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
import shutil
import tempfile
from pathlib import Path
from urllib.parse import unquote_to_bytes, urljoin

import httpx

from text2image.core.config import config

from .models import FormState
from .validation import ValidationError, validate_prompt

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"
FAILED_RESPONSE_MESSAGE = "Failed to generate image"
UNKNOWN_ERROR_MESSAGE = "An error occurred"
DOWNLOAD_STEM = "generated-image"


class RequestError(Exception):
    """The generation endpoint answered with a non-success status."""

    pass


class FormController:
    """Drive a :class:`FormState` through generation requests.

    Args:
        state: Form state to mutate (one per session)
        endpoint_url: Base URL hosting ``POST /api/generate``
            (default: ``config.endpoint_url``)
        timeout: Request timeout in seconds (default: ``config.request_timeout``)
        transport: Optional httpx transport, used by tests to fake the endpoint
    """

    def __init__(
        self,
        state: FormState,
        endpoint_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.state = state
        self.endpoint_url = endpoint_url or config.endpoint_url
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.transport = transport

    async def submit(self, current_prompt: str) -> FormState:
        """Request an image for *current_prompt* and record the outcome.

        Args:
            current_prompt: Prompt text as entered; sent untrimmed

        Returns:
            The updated form state
        """
        state = self.state

        try:
            validate_prompt(current_prompt)
        except ValidationError as e:
            state.error = str(e)
            return state

        state.request_seq += 1
        seq = state.request_seq
        state.busy = True
        state.error = ""
        state.image_url = ""
        self._discard_download()

        try:
            image_url = await self._post_prompt(current_prompt)
        except (RequestError, httpx.HTTPError, ValueError) as e:
            if self._is_current(seq):
                state.error = str(e) or UNKNOWN_ERROR_MESSAGE
                logger.warning(f"Image generation failed: {state.error}")
        except Exception as e:
            if self._is_current(seq):
                state.error = str(e) or UNKNOWN_ERROR_MESSAGE
                logger.error(f"Unexpected error during image generation: {e}", exc_info=True)
        else:
            if self._is_current(seq):
                state.image_url = image_url
                logger.info("Image generated successfully")
        finally:
            if self._is_current(seq):
                state.busy = False
            else:
                logger.info(f"Discarded outcome of superseded request #{seq}")

        return state

    def reset(self) -> FormState:
        """Clear the prompt for another generation.

        The previous image and any error message stay on screen until the
        next submission.
        """
        self.state.prompt = ""
        return self.state

    def download_target(self) -> str | None:
        """Return a downloadable location for the current image.

        Returns:
            ``None`` when there is no image.  For a ``data:`` URI, the path of
            a temporary ``generated-image.<ext>`` file holding the decoded
            bytes.  The file is written once per image and reused on later
            calls.  Otherwise the image URL, resolved against the endpoint
            when relative.

        Raises:
            ValueError: If a ``data:`` URI cannot be decoded
        """
        state = self.state
        ref = state.image_url
        if not ref:
            return None

        if ref.startswith("data:"):
            if state.download_source == ref and Path(state.download_path).is_file():
                return state.download_path
            path = _write_data_uri(ref)
            self._discard_download()
            state.download_source = ref
            state.download_path = str(path)
            return state.download_path

        return urljoin(self.endpoint_url.rstrip("/") + "/", ref)

    def _discard_download(self) -> None:
        """Remove the temporary download file of a previous image, if any."""
        state = self.state
        if state.download_path:
            shutil.rmtree(Path(state.download_path).parent, ignore_errors=True)
            logger.debug(f"Removed download file {state.download_path}")
        state.download_source = ""
        state.download_path = ""

    async def _post_prompt(self, prompt: str) -> str:
        """POST the prompt and return the ``imageUrl`` of a successful response."""
        async with httpx.AsyncClient(
            base_url=self.endpoint_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            response = await client.post(
                GENERATE_PATH,
                json={"prompt": prompt},
                headers={"Content-Type": "application/json"},
            )

        data = response.json()

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise RequestError(message or FAILED_RESPONSE_MESSAGE)

        image_url = data.get("imageUrl") if isinstance(data, dict) else None
        return image_url if isinstance(image_url, str) else ""

    def _is_current(self, seq: int) -> bool:
        return seq == self.state.request_seq


def _write_data_uri(uri: str) -> Path:
    """Decode a ``data:`` URI into a temporary file named for download."""
    header, sep, payload = uri.partition(",")
    if not sep:
        raise ValueError("Malformed data URI")

    media_type = header[len("data:") :].split(";")[0] or "image/png"
    if header.endswith(";base64"):
        raw = base64.b64decode(payload, validate=True)
    else:
        raw = unquote_to_bytes(payload)

    extension = mimetypes.guess_extension(media_type) or ".png"
    directory = Path(tempfile.mkdtemp(prefix="text2image-"))
    path = directory / f"{DOWNLOAD_STEM}{extension}"
    path.write_bytes(raw)
    return path
