"""Gradio prompt form for Text to Image Generator.

Modules
-------
models
    ``FormState``: per-session prompt, result, busy flag, and error.
validation
    Prompt validation with user-facing messages.
controller
    ``FormController``: submits prompts to ``POST /api/generate``.
handlers
    Gradio event handlers that render ``FormState``.
app
    Blocks layout (``create_ui``).
"""

from .controller import FormController
from .models import FormState

__all__ = [
    "FormController",
    "FormState",
]
