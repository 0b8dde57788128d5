"""Gradio UI construction for the VerseCraft app."""
from __future__ import annotations

import os
from concurrent.futures import wait
from typing import TYPE_CHECKING, Any, Callable, Iterator

import gradio as gr

from ..config import AppConfig
from ..constants import (
    CORPUS_TYPE_CHOICES,
    FLOW_CHOICES,
    GENRE_CHOICES,
    LANGUAGE_CHOICES,
    LENGTH_STEP,
    MAX_BPM,
    MAX_LENGTH,
    MAX_ORDER,
    MAX_TEMPERATURE,
    MIN_BPM,
    MIN_LENGTH,
    MIN_ORDER,
    MIN_TEMPERATURE,
    MOOD_CHOICES,
    TEMPERATURE_STEP,
    VOICE_CHOICES,
)
from ..domain.parameters import clamp_parameters
from .common import (
    APP_TITLE,
    LIBRARY_NOTE,
    PARAMETER_NOTE,
    format_connection_report,
    format_generation_meta,
    format_notice_log,
    format_status,
    library_choices,
)

if TYPE_CHECKING:
    from ..application.controller import SessionController
    from ..application.sessions import SessionRegistry

UI_PRIMARY_HUE = os.getenv("UI_PRIMARY_HUE", "violet").strip() or "violet"
APP_THEME = gr.themes.Base(primary_hue=UI_PRIMARY_HUE)
ACTION_POLL_SECONDS = 0.2

FORM_FIELDS = (
    "title",
    "source_text",
    "corpus_type",
    "length",
    "order",
    "temperature",
    "seed",
    "genre",
    "flow",
    "bpm",
    "mood",
    "voice",
    "language",
    "slow",
)


def apply_form_values(controller: "SessionController", *values: Any) -> None:
    """Copy widget values into the session parameters, clamped to UI bounds."""
    changes = dict(zip(FORM_FIELDS, values))
    changes["seed"] = str(changes.get("seed") or "").strip()
    parameters = controller.session.parameters
    parameters.update(**changes)
    clamped = clamp_parameters(parameters)
    parameters.update(
        corpus_type=clamped.corpus_type,
        length=clamped.length,
        order=clamped.order,
        temperature=clamped.temperature,
        bpm=clamped.style.bpm,
    )


def stream_action(
    controller: "SessionController",
    action: Callable[[], object],
    render: Callable[[], Any],
    *,
    poll_seconds: float = ACTION_POLL_SECONDS,
) -> Iterator[Any]:
    """Run ``action`` on the session worker and yield ``render()`` as it progresses.

    While the action is in flight every poll yields the current view, so the
    busy description reaches the page. The last value is rendered after the
    action returns; an unexpected error from the action is re-raised.
    """
    future = controller.submit(action)
    while not future.done():
        wait([future], timeout=poll_seconds)
        if not future.done():
            yield render()
    future.result()
    yield render()


def create_gradio_app(
    *,
    config: AppConfig,
    logger,
    sessions: "SessionRegistry",
) -> gr.Blocks:
    params = sessions.defaults()
    show_notice_log = config.notice_history_limit > 0

    def ensure_session(controller):
        return controller if controller is not None else sessions.open()

    def library_update(controller):
        library = controller.session.library
        records = library.records()
        selected = library.selected()
        ids = {record.id for record in records}
        return gr.update(
            choices=library_choices(records),
            value=selected if selected in ids else None,
        )

    def view_state(controller):
        session = controller.session
        outcome = session.outcome
        playback = session.playback
        values = [
            controller,
            outcome.generated_text,
            format_generation_meta(outcome.used_corpus_id, outcome.meta),
            playback.path,
            playback.path,
            format_status(session.status.current),
            library_update(controller),
        ]
        if show_notice_log:
            values.append(format_notice_log(session.status.history()))
        return tuple(values)

    def on_load(controller):
        return view_state(ensure_session(controller))

    def run_action(action: Callable[["SessionController"], object]):
        def handler(controller, *values):
            controller = ensure_session(controller)
            apply_form_values(controller, *values)
            yield from stream_action(
                controller,
                lambda: action(controller),
                lambda: view_state(controller),
            )

        return handler

    def on_library_select(controller, corpus_id):
        if controller is None:
            return
        library = controller.session.library
        library.select(corpus_id)
        record = library.selected_record()
        logger.debug("Library selection: %s", record.id if record else None)

    def on_connection_test(controller):
        controller = ensure_session(controller)
        return controller, format_connection_report(controller.check_connection())

    with gr.Blocks(theme=APP_THEME, title=APP_TITLE) as app:
        session_state = gr.State(None, delete_callback=sessions.close)
        gr.Markdown(f"# {APP_TITLE}")
        with gr.Row():
            with gr.Column():
                title = gr.Textbox(label="Title", value=params.title)
                source_text = gr.Textbox(
                    label="Source text",
                    value=params.source_text,
                    lines=10,
                    info="Lyrics, poems or any text to learn the style from.",
                )
                corpus_type = gr.Dropdown(
                    CORPUS_TYPE_CHOICES,
                    value=params.corpus_type,
                    label="Corpus type",
                )
                with gr.Row():
                    length = gr.Slider(
                        minimum=MIN_LENGTH,
                        maximum=MAX_LENGTH,
                        value=params.length,
                        step=LENGTH_STEP,
                        label="Length",
                    )
                    order = gr.Slider(
                        minimum=MIN_ORDER,
                        maximum=MAX_ORDER,
                        value=params.order,
                        step=1,
                        label="N-gram order",
                    )
                with gr.Row():
                    temperature = gr.Slider(
                        minimum=MIN_TEMPERATURE,
                        maximum=MAX_TEMPERATURE,
                        value=params.temperature,
                        step=TEMPERATURE_STEP,
                        label="Temperature",
                    )
                    seed = gr.Textbox(label="Seed", value=params.seed, placeholder="optional")
                with gr.Accordion("Style", open=True):
                    with gr.Row():
                        genre = gr.Dropdown(GENRE_CHOICES, value=params.style.genre, label="Genre")
                        flow = gr.Dropdown(FLOW_CHOICES, value=params.style.flow, label="Flow")
                        mood = gr.Dropdown(MOOD_CHOICES, value=params.style.mood, label="Mood")
                    bpm = gr.Slider(
                        minimum=MIN_BPM,
                        maximum=MAX_BPM,
                        value=params.style.bpm,
                        step=1,
                        label="BPM",
                    )
                    with gr.Row():
                        voice = gr.Dropdown(VOICE_CHOICES, value=params.style.voice, label="Voice")
                        language = gr.Dropdown(
                            LANGUAGE_CHOICES,
                            value=params.style.language,
                            label="Language",
                        )
                        slow = gr.Checkbox(label="Slow speech", value=params.style.slow)
                with gr.Accordion("About the parameters", open=False):
                    gr.Markdown(PARAMETER_NOTE)
                with gr.Row():
                    generate_btn = gr.Button("Generate from Text", variant="primary")
                    save_btn = gr.Button("Save to Library", variant="secondary")
                    sing_btn = gr.Button("Generate & Sing", variant="primary")
            with gr.Column():
                status = gr.Markdown()
                output_text = gr.Textbox(
                    label="Generated lyrics",
                    lines=12,
                    interactive=False,
                    show_copy_button=True,
                )
                output_meta = gr.Markdown()
                speak_btn = gr.Button("Speak Output", variant="secondary")
                out_audio = gr.Audio(
                    label="Voice",
                    type="filepath",
                    interactive=False,
                    autoplay=True,
                )
                out_file = gr.File(label="Download", interactive=False)
                with gr.Accordion("Library", open=True):
                    gr.Markdown(LIBRARY_NOTE)
                    library = gr.Radio(choices=[], label="Saved corpora")
                    with gr.Row():
                        refresh_btn = gr.Button("Refresh", variant="secondary")
                        selected_btn = gr.Button("Generate from Selected", variant="secondary")
                        selected_sing_btn = gr.Button(
                            "Generate & Sing from Selected",
                            variant="secondary",
                        )
                notice_log = None
                if show_notice_log:
                    with gr.Accordion("Notices", open=False):
                        notice_log = gr.Markdown()
                with gr.Accordion("Connection", open=False):
                    connection_btn = gr.Button("Test connection", variant="secondary")
                    connection_report = gr.Markdown()

        form_inputs = [
            title,
            source_text,
            corpus_type,
            length,
            order,
            temperature,
            seed,
            genre,
            flow,
            bpm,
            mood,
            voice,
            language,
            slow,
        ]
        view_outputs = [session_state, output_text, output_meta, out_audio, out_file, status, library]
        if notice_log is not None:
            view_outputs.append(notice_log)
        action_buttons = [
            generate_btn,
            save_btn,
            sing_btn,
            speak_btn,
            refresh_btn,
            selected_btn,
            selected_sing_btn,
        ]

        def lock_buttons():
            return [gr.update(interactive=False) for _ in action_buttons]

        def unlock_buttons():
            return [gr.update(interactive=True) for _ in action_buttons]

        actions = [
            (generate_btn, lambda controller: controller.generate_from_text()),
            (save_btn, lambda controller: controller.save_corpus()),
            (sing_btn, lambda controller: controller.generate_and_speak()),
            (speak_btn, lambda controller: controller.speak()),
            (refresh_btn, lambda controller: controller.refresh_library()),
            (selected_btn, lambda controller: controller.generate_from_selected()),
            (
                selected_sing_btn,
                lambda controller: controller.generate_and_speak(from_selected=True),
            ),
        ]
        for button, action in actions:
            button.click(
                fn=lock_buttons,
                outputs=action_buttons,
                queue=False,
                api_name=False,
            ).then(
                fn=run_action(action),
                inputs=[session_state, *form_inputs],
                outputs=view_outputs,
                api_name=False,
            ).then(
                fn=unlock_buttons,
                outputs=action_buttons,
                queue=False,
                api_name=False,
            )

        library.change(
            fn=on_library_select,
            inputs=[session_state, library],
            api_name=False,
        )
        connection_btn.click(
            fn=on_connection_test,
            inputs=[session_state],
            outputs=[session_state, connection_report],
            api_name=False,
        )
        app.load(
            fn=on_load,
            inputs=[session_state],
            outputs=view_outputs,
            api_name=False,
        )

    logger.debug("UI wiring complete")
    return app
