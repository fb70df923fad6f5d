"""Validation utilities for the prompt form."""

import logging

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt"


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt(prompt: str | None) -> None:
    """Validate that a prompt can be submitted.

    Args:
        prompt: Prompt text as entered by the user

    Raises:
        ValidationError: If the prompt is missing or whitespace only
    """
    if not prompt or not prompt.strip():
        logger.debug("Rejected blank prompt")
        raise ValidationError(EMPTY_PROMPT_MESSAGE)
