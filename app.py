import logging

import gradio as gr

from response_formatter.handlers import (
    export_result_handler,
    format_payload_handler,
    load_payload_handler,
)

# --- UI Definition ---
with gr.Blocks(title="Response Formatter") as demo:
    gr.Markdown("# Response Formatter")
    gr.Markdown("Load a backend JSON payload, then extract, filter, rename and group its fields.")

    # State
    payload_state = gr.State()
    result_state = gr.State()

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Payload")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            status_msg = gr.Textbox(label="Status", interactive=False)
            payload_text = gr.Code(label="Payload", language="json", lines=18, interactive=True)
            is_complete = gr.Checkbox(label="Upstream call completed", value=True)

        # Right Panel: Formatter configuration
        with gr.Column(scale=1):
            gr.Markdown("### 2. Extract")
            target = gr.Textbox(label="Target field", placeholder="data")

            gr.Markdown("### 3. Filter")
            gr.Markdown("One dot path per line. A whitelist takes precedence over a blacklist.")
            with gr.Row():
                whitelist = gr.Textbox(label="Whitelist", lines=4, placeholder="a.b")
                blacklist = gr.Textbox(label="Blacklist", lines=4, placeholder="a.c")
            strategy = gr.Radio(
                choices=["deletion", "accumulate"],
                value="deletion",
                label="Whitelist strategy",
            )

            gr.Markdown("### 4. Rename & Group")
            mapping_table = gr.Dataframe(
                headers=["Field", "New Name"],
                datatype=["str", "str"],
                col_count=(2, "fixed"),
                interactive=True,
                label="Field Mapping",
            )
            group = gr.Textbox(label="Group under", placeholder="group")

            format_btn = gr.Button("Format", variant="primary")

    gr.Markdown("### 5. Result")
    result_view = gr.JSON(label="Formatted Response")
    with gr.Row():
        output_filename = gr.Textbox(label="Output Filename (optional)", placeholder="formatted")
        export_btn = gr.Button("Export Result")
    download_output = gr.File(label="Download Result")

    file_input.upload(
        fn=load_payload_handler,
        inputs=[file_input],
        outputs=[payload_state, payload_text, status_msg],
    )

    format_btn.click(
        fn=format_payload_handler,
        inputs=[payload_text, target, whitelist, blacklist, group, mapping_table, strategy, is_complete],
        outputs=[result_state, status_msg],
    ).then(
        fn=lambda result: result,
        inputs=[result_state],
        outputs=[result_view],
    )

    export_btn.click(
        fn=export_result_handler,
        inputs=[result_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    demo.launch()
