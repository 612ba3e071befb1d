import logging
from functools import partial

import gradio as gr

from json_data_checker.config import CheckerConfig
from json_data_checker.editor import ExpandState, display_leaf_value
from json_data_checker.handlers import (
    change_page_handler,
    clear_selection_handler,
    delete_node_handler,
    edit_leaf_handler,
    export_handler,
    load_file_handler,
    load_text_handler,
    move_record_handler,
    move_to_position_handler,
    page_size_handler,
    select_all_handler,
    set_expanded_handler,
    toggle_field_handler,
)
from json_data_checker.store import CollectionStore

CONFIG = CheckerConfig.from_env()

# --- UI Definition ---
with gr.Blocks(title="JSON Data Checker") as demo:
    gr.Markdown("# JSON Data Checker")
    gr.Markdown("Load JSON records, pick the fields to focus on, edit, reorder and save the result.")

    # State
    store_state = gr.State(value=CollectionStore(CONFIG))
    expand_state = gr.State(value={})
    loaded_version = gr.State(value=0)
    view_version = gr.State(value=0)

    with gr.Row():
        # Left Panel: Input & Field Selection
        with gr.Column(scale=1):
            gr.Markdown("### 1. Import")
            file_input = gr.File(label="Upload JSON File", file_types=[".json"])
            json_input = gr.Textbox(label="Or paste your JSON here", lines=4)
            load_text_btn = gr.Button("Load JSON")
            status_msg = gr.Textbox(label="Status", interactive=False)

            gr.Markdown("### 2. Select Fields to Focus")
            with gr.Row():
                select_all_btn = gr.Button("Select all", size="sm")
                clear_btn = gr.Button("Clear", size="sm")

            @gr.render(inputs=[store_state], triggers=[loaded_version.change])
            def render_fields(store):
                if store is None or store.selector.tree is None:
                    gr.Markdown("No data loaded.")
                    return

                def recursive_ui(node):
                    if node.is_leaf:
                        cb = gr.Checkbox(label=node.label, value=store.selector.is_selected(node.path))
                        cb.input(
                            fn=partial(toggle_field_handler, node.path),
                            inputs=[cb, store_state, view_version],
                            outputs=[store_state, view_version],
                        )
                        return
                    with gr.Accordion(node.label, open=not node.path):
                        for child in node.children:
                            recursive_ui(child)

                recursive_ui(store.selector.tree)

        # Right Panel: Records
        with gr.Column(scale=2):
            gr.Markdown("### 3. Records")
            with gr.Row():
                page_size = gr.Dropdown(
                    label="Items per page",
                    choices=list(CONFIG.page_size_choices),
                    value=CONFIG.default_page_size,
                    interactive=True,
                )
                summary_text = gr.Textbox(label="Items", value="Showing 0-0 of 0 items", interactive=False)
            with gr.Row():
                prev_btn = gr.Button("Previous Page")
                page_label = gr.Textbox(show_label=False, value="Page 1 of 1", interactive=False)
                next_btn = gr.Button("Next Page")

            @gr.render(inputs=[store_state, expand_state], triggers=[view_version.change])
            def render_records(store, expand_states):
                if store is None or not store.records:
                    gr.Markdown("No records to show.")
                    return

                window = store.current_window()
                editor = store.editor()
                page_outputs = [store_state, view_version, page_label, summary_text]

                def render_node(record_id, node):
                    if node.is_leaf:
                        with gr.Row():
                            tb = gr.Textbox(
                                label=node.label,
                                value=display_leaf_value(node.value),
                                lines=2 if isinstance(node.value, str) else 1,
                                scale=8,
                            )
                            del_btn = gr.Button("Delete", variant="stop", size="sm", scale=1)
                        tb.blur(
                            fn=partial(edit_leaf_handler, record_id, node.path),
                            inputs=[tb, store_state, view_version],
                            outputs=[store_state, view_version],
                        )
                        del_btn.click(
                            fn=partial(delete_node_handler, record_id, node.path),
                            inputs=[store_state, view_version],
                            outputs=page_outputs,
                        )
                        return

                    with gr.Accordion(node.label, open=node.expanded) as acc:
                        if node.path:
                            del_btn = gr.Button(f"Delete {node.label}", variant="stop", size="sm")
                            del_btn.click(
                                fn=partial(delete_node_handler, record_id, node.path),
                                inputs=[store_state, view_version],
                                outputs=page_outputs,
                            )
                        for child in node.children:
                            render_node(record_id, child)
                    acc.expand(
                        fn=partial(set_expanded_handler, record_id, node.path, True),
                        inputs=[expand_state, view_version],
                        outputs=[expand_state, view_version],
                    )
                    acc.collapse(
                        fn=partial(set_expanded_handler, record_id, node.path, False),
                        inputs=[expand_state, view_version],
                        outputs=[expand_state, view_version],
                    )

                for offset, record in enumerate(window.records):
                    position = window.start + offset + 1
                    view = editor.render(record.edited, expand_states.get(record.id) or ExpandState())
                    with gr.Group():
                        header = f"**#{position}** `{record.id}`"
                        if record.is_modified:
                            header += " (edited)"
                        with gr.Row():
                            gr.Markdown(header)
                            up_btn = gr.Button("Move up", size="sm", interactive=offset > 0)
                            down_btn = gr.Button("Move down", size="sm", interactive=offset < len(window.records) - 1)
                            move_to = gr.Number(label="Move to #", precision=0, minimum=1, maximum=window.total)
                            delete_btn = gr.Button("Delete record", variant="stop", size="sm")
                        up_btn.click(
                            fn=partial(move_record_handler, offset, offset - 1),
                            inputs=[store_state, view_version],
                            outputs=[store_state, view_version],
                        )
                        down_btn.click(
                            fn=partial(move_record_handler, offset, offset + 1),
                            inputs=[store_state, view_version],
                            outputs=[store_state, view_version],
                        )
                        move_to.submit(
                            fn=partial(move_to_position_handler, record.id),
                            inputs=[move_to, store_state, view_version],
                            outputs=[store_state, view_version],
                        )
                        delete_btn.click(
                            fn=partial(delete_node_handler, record.id, ()),
                            inputs=[store_state, view_version],
                            outputs=page_outputs,
                        )
                        if view is not None:
                            render_node(record.id, view)

            gr.Markdown("### 4. Export")
            output_filename = gr.Textbox(label="Output Filename (optional)", placeholder=CONFIG.export_file_name)
            export_btn = gr.Button("Save Changes", variant="primary")
            download_output = gr.File(label="Download Result")

    load_outputs = [store_state, loaded_version, view_version, expand_state, status_msg, page_label, summary_text]

    file_input.upload(
        fn=load_file_handler,
        inputs=[file_input, store_state, loaded_version, view_version, expand_state],
        outputs=load_outputs,
    )

    load_text_btn.click(
        fn=load_text_handler,
        inputs=[json_input, store_state, loaded_version, view_version, expand_state],
        outputs=load_outputs + [json_input],
    )

    select_all_btn.click(
        fn=select_all_handler,
        inputs=[store_state, loaded_version, view_version],
        outputs=[store_state, loaded_version, view_version],
    )

    clear_btn.click(
        fn=clear_selection_handler,
        inputs=[store_state, loaded_version, view_version],
        outputs=[store_state, loaded_version, view_version],
    )

    page_size.change(
        fn=page_size_handler,
        inputs=[page_size, store_state, view_version],
        outputs=[store_state, view_version, page_label, summary_text],
    )

    prev_btn.click(
        fn=partial(change_page_handler, -1),
        inputs=[store_state, view_version],
        outputs=[store_state, view_version, page_label, summary_text],
    )

    next_btn.click(
        fn=partial(change_page_handler, 1),
        inputs=[store_state, view_version],
        outputs=[store_state, view_version, page_label, summary_text],
    )

    export_btn.click(
        fn=export_handler,
        inputs=[store_state, output_filename],
        outputs=[download_output, status_msg],
    )

if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, CONFIG.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    demo.launch()
