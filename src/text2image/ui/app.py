"""Gradio UI for Text to Image Generator."""

import logging

import gradio as gr

from .handlers import reset_form, submit_prompt, update_prompt
from .models import SUBMIT_LABEL, FormState

logger = logging.getLogger(__name__)

PROMPT_PLACEHOLDER = "e.g., A serene mountain landscape at sunset with a crystal clear lake..."


def create_ui() -> gr.Blocks:
    """Create the prompt form.

    Returns:
        Gradio Blocks app, ready to launch or mount on the API server
    """
    app = gr.Blocks(title="Text to Image Generator")

    with app:
        # Session state - one instance per user
        form_state = gr.State(FormState())

        gr.Markdown(
            """
            # Text to Image Generator
            ### Transform your words into stunning images with AI
            """
        )

        with gr.Group():
            prompt_input = gr.Textbox(
                label="Enter your prompt",
                placeholder=PROMPT_PLACEHOLDER,
                lines=4,
                max_lines=4,
            )
            submit_button = gr.Button(
                SUBMIT_LABEL,
                variant="primary",
                interactive=False,
            )

        error_panel = gr.Markdown(visible=False, elem_classes=["error-panel"])

        with gr.Column(visible=False) as result_group:
            gr.Markdown("## Generated Image")
            image_output = gr.Image(
                label="Generated Image",
                type="filepath",
                interactive=False,
            )
            with gr.Row():
                download_button = gr.DownloadButton("Download Image", variant="primary")
                another_button = gr.Button("Generate Another", variant="secondary")

        # Order must match handlers.FORM_OUTPUTS
        form_outputs = [
            prompt_input,
            submit_button,
            error_panel,
            result_group,
            image_output,
            download_button,
            form_state,
        ]

        prompt_input.change(
            fn=update_prompt,
            inputs=[prompt_input, form_state],
            outputs=[submit_button, form_state],
        )

        submit_button.click(
            fn=submit_prompt,
            inputs=[prompt_input, form_state],
            outputs=form_outputs,
        )

        another_button.click(
            fn=reset_form,
            inputs=[form_state],
            outputs=form_outputs,
        )

    return app
