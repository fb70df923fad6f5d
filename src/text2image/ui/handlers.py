"""Gradio event handlers for the prompt form.

Handlers receive widget values plus the session :class:`FormState`, drive a
:class:`FormController`, and return ``gr.update`` objects for the widgets in
:data:`FORM_OUTPUTS` order followed by the updated state.
"""

import asyncio
import logging

import gradio as gr

from .controller import FormController
from .models import FormState

logger = logging.getLogger(__name__)

# Output order shared by every handler that re-renders the form
FORM_OUTPUTS = (
    "prompt_input",
    "submit_button",
    "error_panel",
    "result_group",
    "image_output",
    "download_button",
)


def render_form(state: FormState) -> tuple:
    """Build widget updates that reflect *state*.

    Args:
        state: Current form state

    Returns:
        Tuple of updates in :data:`FORM_OUTPUTS` order
    """
    target = None
    if state.has_result:
        controller = FormController(state)
        try:
            target = controller.download_target()
        except ValueError as e:
            logger.error(f"Could not prepare image for download: {e}")

    return (
        gr.update(value=state.prompt, interactive=not state.busy),
        gr.update(value=state.submit_label, interactive=state.can_submit),
        gr.update(value=state.error, visible=state.has_error),
        gr.update(visible=state.has_result),
        gr.update(value=target),
        gr.update(value=target),
    )


def update_prompt(prompt: str, state: FormState) -> tuple:
    """Track prompt edits and toggle the submit button.

    Returns:
        Tuple of (submit_button_update, updated_state)
    """
    state.prompt = prompt or ""
    return gr.update(interactive=state.can_submit), state


async def submit_prompt(prompt: str, state: FormState):
    """Submit the prompt, yielding the busy form and then the settled form.

    Args:
        prompt: Current prompt textbox value
        state: Session form state

    Yields:
        Form updates in :data:`FORM_OUTPUTS` order followed by the state
    """
    state.prompt = prompt or ""
    controller = FormController(state)

    pending = asyncio.ensure_future(controller.submit(state.prompt))
    # Let submit() run up to its request so the busy render goes out first
    await asyncio.sleep(0)
    if not pending.done():
        yield (*render_form(state), state)

    await pending
    logger.debug(f"Submission settled: {state!r}")
    yield (*render_form(state), state)


def reset_form(state: FormState) -> tuple:
    """Handle "Generate Another": clear the prompt, keep the last result."""
    FormController(state).reset()
    return (*render_form(state), state)
