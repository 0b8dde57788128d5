import threading
from datetime import datetime
from pathlib import Path

import gradio as gr
import pytest

from versecraft.application.controller import SessionController
from versecraft.application.session import GenerationSession
from versecraft.application.sessions import SessionRegistry
from versecraft.application.status import NoticeEntry, OperationStatus, StatusKind
from versecraft.config import AppConfig
from versecraft.domain.corpus import CorpusRecord
from versecraft.domain.requests import ConnectionReport, GenerationResult
from versecraft.logging_config import setup_logging
from versecraft.ui.common import (
    format_connection_report,
    format_generation_meta,
    format_notice_log,
    format_status,
    library_choices,
)
from versecraft.ui.gradio_app import (
    FORM_FIELDS,
    apply_form_values,
    create_gradio_app,
    stream_action,
)


class _Logger:
    def __init__(self):
        self.debugs = []

    def debug(self, message, *args):
        self.debugs.append(message % args if args else message)

    def info(self, *_args):
        return None

    def warning(self, *_args):
        return None

    def exception(self, *_args):
        return None


def _build_config(tmp_path: Path, *, notice_history_limit: int = 5) -> AppConfig:
    log_dir = tmp_path / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    outputs = tmp_path / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)
    return AppConfig(
        log_level="INFO",
        file_log_level="DEBUG",
        log_dir=str(log_dir),
        log_file=str(log_dir / "app.log"),
        backend_url="http://svc",
        request_timeout_seconds=None,
        output_dir=str(outputs),
        output_dir_abs=str(outputs.resolve()),
        notice_history_limit=notice_history_limit,
    )


def _controller(logger, service=None):
    session = GenerationSession.create(logger=logger)
    return SessionController(session, service=service, logger=logger)


class _SlowService:
    def __init__(self):
        self.release = threading.Event()

    def generate(self, request):
        assert self.release.wait(timeout=5)
        return GenerationResult(text="slow verse")


def test_setup_logging_replaces_handlers(tmp_path):
    config = _build_config(tmp_path)
    logger = setup_logging(config)
    logger_again = setup_logging(config)

    assert logger is logger_again
    assert logger.name == "versecraft"
    assert len(logger.handlers) == 2
    assert Path(config.log_file).exists()


def test_create_gradio_app_builds_blocks(tmp_path):
    logger = _Logger()
    for limit in (0, 5):
        app = create_gradio_app(
            config=_build_config(tmp_path, notice_history_limit=limit),
            logger=logger,
            sessions=SessionRegistry(
                config=_build_config(tmp_path, notice_history_limit=limit),
                service=None,
                logger=logger,
            ),
        )
        assert isinstance(app, gr.Blocks)
    assert logger.debugs.count("UI wiring complete") == 2


def test_apply_form_values_clamps_into_session():
    controller = _controller(_Logger())
    values = {
        "title": "Rain",
        "source_text": "drops on the window",
        "corpus_type": "poem",
        "length": 9999,
        "order": 0,
        "temperature": 1.25,
        "seed": "  7 ",
        "genre": "jazz",
        "flow": "story",
        "bpm": 500,
        "mood": "sad",
        "voice": "male",
        "language": "fr",
        "slow": True,
    }

    apply_form_values(controller, *(values[name] for name in FORM_FIELDS))

    params = controller.session.parameters
    assert params.title == "Rain"
    assert (params.length, params.order, params.temperature) == (2000, 1, 1.25)
    assert params.seed == "7"
    assert params.style.bpm == 240
    assert params.style.voice == "male"
    assert params.style.slow is True


def test_formatting_helpers():
    record = CorpusRecord(id="c1", title="Song", kind="lyrics")
    assert library_choices([record]) == [("Song · lyrics", "c1")]

    assert format_status(OperationStatus.idle()) == ""
    assert format_status(OperationStatus.failed("Save failed: x")).endswith("Save failed: x")

    entries = [
        NoticeEntry(datetime(2024, 1, 1, 9, 0, 0), StatusKind.BUSY, "Generating..."),
        NoticeEntry(datetime(2024, 1, 1, 9, 0, 2), StatusKind.SUCCEEDED, "Generation complete."),
    ]
    log = format_notice_log(entries).splitlines()
    assert log[0] == "- `09:00:02` succeeded: Generation complete."
    assert format_notice_log([]) == "_No notices yet._"

    assert format_generation_meta("c1", {"order": 3}) == "corpus `c1` · order: 3"
    assert format_generation_meta(None, None) == ""

    healthy = format_connection_report(
        ConnectionReport(backend_ok=True, database_ok=True, database_name="ngram", collections=("corpora",))
    )
    assert "`ngram`" in healthy and "corpora" in healthy
    assert "unreachable" in format_connection_report(ConnectionReport(backend_ok=False, error="refused"))
    assert "auth" in format_connection_report(ConnectionReport(backend_ok=True, error="auth failed"))


def test_stream_action_shows_busy_status_before_the_outcome():
    service = _SlowService()
    controller = _controller(_Logger(), service=service)
    controller.session.parameters.update(source_text="rain on the window pane")
    views = []

    for view in stream_action(
        controller,
        controller.generate_from_text,
        lambda: controller.session.status.notice,
        poll_seconds=0.01,
    ):
        views.append(view)
        if view == "Generating..." or len(views) > 500:
            service.release.set()
    controller.shutdown()

    assert "Generating..." in views
    assert views[-1] == "Generation complete."
    assert controller.session.outcome.generated_text == "slow verse"


def test_stream_action_reraises_unexpected_errors():
    controller = _controller(_Logger())

    def boom():
        raise RuntimeError("unexpected")

    with pytest.raises(RuntimeError, match="unexpected"):
        list(stream_action(controller, boom, lambda: "view", poll_seconds=0.01))
    controller.shutdown()
