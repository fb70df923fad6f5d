"""Data models for the prompt form state."""

from dataclasses import dataclass

SUBMIT_LABEL = "Generate Image"
BUSY_LABEL = "Generating Image..."


@dataclass
class FormState:
    """Session state for the prompt form.

    One instance lives in each browser session's ``gr.State``.  Every field
    is re-derived per submission and nothing outlives the session.

    Attributes
    ----------
    prompt : str
        Current contents of the prompt textbox
    image_url : str
        Reference (URL or data URI) to the last generated image, or ""
    busy : bool
        True while a generation request is in flight
    error : str
        Message shown in the error panel, or ""
    request_seq : int
        Stamp of the most recent submission; results of older submissions
        are not applied
    download_source : str
        Data URI last written out for download, or ""
    download_path : str
        Temporary file holding the decoded ``download_source``, or ""
    """

    prompt: str = ""
    image_url: str = ""
    busy: bool = False
    error: str = ""
    request_seq: int = 0
    download_source: str = ""
    download_path: str = ""

    @property
    def can_submit(self) -> bool:
        """Whether the submit button should be enabled."""
        return not self.busy and bool(self.prompt.strip())

    @property
    def submit_label(self) -> str:
        return BUSY_LABEL if self.busy else SUBMIT_LABEL

    @property
    def has_result(self) -> bool:
        return bool(self.image_url)

    @property
    def has_error(self) -> bool:
        return bool(self.error)

    def __repr__(self) -> str:
        return (
            f"FormState(busy={self.busy}, has_result={self.has_result}, "
            f"error={self.error!r}, request_seq={self.request_seq})"
        )
