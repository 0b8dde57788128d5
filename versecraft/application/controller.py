"""Request orchestration for one generation session."""
from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from ..domain.errors import ServiceError, SessionError, TransportError, ValidationError
from ..domain.parameters import SessionParameters, has_enough_text
from ..domain.requests import ConnectionReport, CorpusDraft, GenerationRequest, SpeechRequest
from .ports import GeneratorServicePort
from .session import GenerationSession
from .status import OperationStatus, StatusKind
from .ui_hooks import UiHooks

TEXT_TOO_SHORT = "Please paste more text (longer than n-gram order)."
NO_SELECTION = "Pick a saved corpus from your library first."
NOTHING_TO_SPEAK = "Nothing to speak. Generate text first."
AUDIO_NOT_STORED = "Speech synthesis failed: could not store audio."
LIBRARY_UNAVAILABLE = (
    "Corpus library is unavailable. You can still generate from raw text; "
    "saving requires the corpus store."
)


def failure_message(action: str, error: SessionError) -> str:
    if isinstance(error, ValidationError):
        return str(error)
    if isinstance(error, ServiceError) and error.detail:
        return f"{action} failed: {error.detail}"
    if isinstance(error, ServiceError):
        return f"{action} failed: the service reported an error."
    return f"{action} failed: could not reach the generator service."


class SessionController:
    """Sequences save, generate and synthesize calls against one session.

    Every triggered action takes a ticket. Completions write status, output
    text and audio only while their ticket is still the latest one, so the
    most recently triggered action always owns what the user sees. Corpus
    records echoed by the server are applied to the library regardless.
    """

    def __init__(
        self,
        session: GenerationSession,
        service: GeneratorServicePort,
        logger,
        *,
        ui_hooks: UiHooks | None = None,
    ) -> None:
        self.session = session
        self.service = service
        self.logger = logger
        self.ui_hooks = ui_hooks
        self._ticket_lock = threading.Lock()
        self._latest_ticket = 0
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self.session.status.current.is_busy

    @property
    def latest_ticket(self) -> int:
        with self._ticket_lock:
            return self._latest_ticket

    def _begin(
        self,
        description: str,
        *,
        clear_output: bool = False,
        clear_audio: bool = False,
    ) -> int:
        with self._ticket_lock:
            self._latest_ticket += 1
            ticket = self._latest_ticket
            if clear_output:
                self.session.outcome.clear()
            if clear_audio:
                self.session.playback.clear()
            self.session.status.set(OperationStatus.busy(description))
        self.logger.debug("Dispatch ticket=%s: %s", ticket, description)
        return ticket

    def _advance(self, ticket: int, description: str, *, clear_audio: bool = False) -> bool:
        with self._ticket_lock:
            if ticket != self._latest_ticket:
                return False
            if clear_audio:
                self.session.playback.clear()
            self.session.status.set(OperationStatus.busy(description))
        self.logger.debug("Continue ticket=%s: %s", ticket, description)
        return True

    def _settle(
        self,
        ticket: int,
        status: OperationStatus,
        apply: Callable[[], object] | None = None,
    ) -> bool:
        with self._ticket_lock:
            latest = self._latest_ticket
            current = ticket == latest
            if current:
                if apply is not None:
                    apply()
                self.session.status.set(status)
        if not current:
            self.logger.debug(
                "Discarded stale completion: ticket=%s latest=%s status=%s",
                ticket,
                latest,
                status.message,
            )
            return False
        self._report(status)
        return True

    def _reject(self, error: ValidationError) -> OperationStatus:
        status = OperationStatus.failed(failure_message("Validation", error))
        with self._ticket_lock:
            self._latest_ticket += 1
            self.session.status.set(status)
        self._report(status)
        return status

    def _fail(self, ticket: int, action: str, error: SessionError) -> OperationStatus:
        if isinstance(error, TransportError):
            self.logger.warning("%s transport failure: %s", action, error)
        status = OperationStatus.failed(failure_message(action, error))
        self._settle(ticket, status)
        return status

    def _report(self, status: OperationStatus) -> None:
        if status.kind is StatusKind.FAILED:
            self.logger.warning("%s", status.message)
            if self.ui_hooks:
                self.ui_hooks.warn(status.message)
        elif status.kind is StatusKind.SUCCEEDED:
            self.logger.info("%s", status.message)
            if self.ui_hooks:
                self.ui_hooks.info(status.message)

    def refresh_library(self) -> OperationStatus:
        library = self.session.library
        first_load = not library.loaded
        ticket = self._begin("Loading library...")
        try:
            records = library.refresh(self.service.list_corpora)
        except SessionError as exc:
            if first_load:
                self.logger.warning("Initial library load failed: %s", exc)
                status = OperationStatus.failed(LIBRARY_UNAVAILABLE)
                self._settle(ticket, status)
                return status
            return self._fail(ticket, "Library refresh", exc)
        status = OperationStatus.succeeded(f"Library loaded: {len(records)} corpora.")
        self._settle(ticket, status)
        return status

    def save_corpus(self) -> OperationStatus:
        params = self.session.parameters.snapshot()
        if not has_enough_text(params.source_text, params.order):
            return self._reject(ValidationError(TEXT_TOO_SHORT))
        draft = CorpusDraft.from_parameters(params)
        ticket = self._begin("Saving to library...")
        try:
            record = self.service.create_corpus(draft)
        except SessionError as exc:
            return self._fail(ticket, "Save", exc)
        self.session.library.append(record)
        status = OperationStatus.succeeded("Saved to library.")
        self._settle(ticket, status)
        return status

    def _run_generation(
        self,
        params: SessionParameters,
        *,
        from_selected: bool,
    ) -> tuple[OperationStatus, int | None, str | None]:
        if from_selected:
            corpus_id = self.session.library.selected()
            if corpus_id is None:
                return self._reject(ValidationError(NO_SELECTION)), None, None
            request = GenerationRequest.from_parameters(params, corpus_id=corpus_id)
        else:
            if not has_enough_text(params.source_text, params.order):
                return self._reject(ValidationError(TEXT_TOO_SHORT)), None, None
            request = GenerationRequest.from_parameters(params)
        ticket = self._begin("Generating...", clear_output=True, clear_audio=True)
        try:
            result = self.service.generate(request)
        except SessionError as exc:
            return self._fail(ticket, "Generation", exc), ticket, None

        def apply() -> None:
            outcome = self.session.outcome
            outcome.generated_text = result.text
            outcome.used_corpus_id = result.used_corpus_id
            outcome.meta = dict(result.meta)

        status = OperationStatus.succeeded("Generation complete.")
        applied = self._settle(ticket, status, apply)
        return status, ticket, result.text if applied else None

    def generate_from_text(self) -> OperationStatus:
        params = self.session.parameters.snapshot()
        status, _, _ = self._run_generation(params, from_selected=False)
        return status

    def generate_from_selected(self) -> OperationStatus:
        params = self.session.parameters.snapshot()
        status, _, _ = self._run_generation(params, from_selected=True)
        return status

    def _run_synthesis(self, ticket: int, text: str, params: SessionParameters) -> OperationStatus:
        request = SpeechRequest.from_parameters(text, params)
        try:
            artifact = self.service.synthesize_speech(request)
        except SessionError as exc:
            return self._fail(ticket, "Speech synthesis", exc)
        playback = self.session.playback
        try:
            path = playback.store(artifact)
        except OSError as exc:
            self.logger.warning("Audio file write failed: %s", exc)
            status = OperationStatus.failed(AUDIO_NOT_STORED)
            self._settle(ticket, status)
            return status
        status = OperationStatus.succeeded("Ready to play.")
        if not self._settle(ticket, status, lambda: playback.install(artifact, path)):
            playback.discard(path)
        return status

    def speak(self, text: str | None = None) -> OperationStatus:
        """Synthesize ``text``, or the current generated text when omitted."""
        params = self.session.parameters.snapshot()
        target = self.session.outcome.generated_text if text is None else text
        if not (target or "").strip():
            return self._reject(ValidationError(NOTHING_TO_SPEAK))
        ticket = self._begin("Synthesizing voice...", clear_audio=True)
        return self._run_synthesis(ticket, target, params)

    def generate_and_speak(self, *, from_selected: bool = False) -> OperationStatus:
        """Generate, then synthesize the settled generation result.

        A failed generation ends the action. A failed synthesis keeps the
        generated text; the status reports the synthesis failure.
        """
        params = self.session.parameters.snapshot()
        status, ticket, text = self._run_generation(params, from_selected=from_selected)
        if ticket is None or text is None:
            return status
        if not text.strip():
            status = OperationStatus.failed(NOTHING_TO_SPEAK)
            self._settle(ticket, status)
            return status
        if not self._advance(ticket, "Synthesizing voice...", clear_audio=True):
            self.logger.debug("Synthesis skipped: ticket=%s was superseded", ticket)
            return status
        return self._run_synthesis(ticket, text, params)

    def check_connection(self) -> ConnectionReport:
        report = self.service.check_connection()
        self.logger.info(
            "Connection test: backend=%s db=%s db_name=%s error=%s",
            report.backend_ok,
            report.database_ok,
            report.database_name,
            report.error,
        )
        return report

    def _on_background_done(self, future: Future) -> None:
        try:
            future.result()
        except Exception:
            self.logger.exception("Background session action failed")

    def submit(self, action: Callable[..., object], *args, **kwargs) -> Future:
        """Run an action on the background worker."""
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1,
                    thread_name_prefix="session-action",
                )
            future = self._executor.submit(action, *args, **kwargs)
        future.add_done_callback(self._on_background_done)
        return future

    def shutdown(self, wait: bool = True) -> None:
        with self._executor_lock:
            executor = self._executor
            self._executor = None
        if executor is not None:
            executor.shutdown(wait=wait)
