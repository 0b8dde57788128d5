"""Per-client session lifecycle."""
from __future__ import annotations

import threading
import weakref

from ..config import AppConfig
from ..domain.parameters import SessionParameters
from ..storage.audio_writer import AudioArtifactWriter
from .controller import SessionController
from .ports import GeneratorServicePort
from .session import GenerationSession, default_parameters
from .ui_hooks import UiHooks


class SessionRegistry:
    """Opens one session controller per browser client.

    The service client and the audio writer are shared by every client.
    Parameters, library cache, outcome, status and audio belong to one
    client and are released when that client's page goes away.
    """

    def __init__(
        self,
        *,
        config: AppConfig,
        service: GeneratorServicePort,
        logger,
        audio_writer: AudioArtifactWriter | None = None,
        ui_hooks: UiHooks | None = None,
    ) -> None:
        self.config = config
        self.service = service
        self.logger = logger
        self.audio_writer = audio_writer
        self.ui_hooks = ui_hooks
        self._lock = threading.Lock()
        self._controllers: "weakref.WeakSet[SessionController]" = weakref.WeakSet()
        self._opened = 0

    @property
    def active(self) -> int:
        with self._lock:
            return len(self._controllers)

    def defaults(self) -> SessionParameters:
        return default_parameters(self.config)

    def open(self) -> SessionController:
        session = GenerationSession.create(
            logger=self.logger,
            parameters=self.defaults(),
            audio_writer=self.audio_writer,
            history_limit=self.config.notice_history_limit,
        )
        controller = SessionController(session, self.service, self.logger, ui_hooks=self.ui_hooks)
        with self._lock:
            self._controllers.add(controller)
            self._opened += 1
            number = self._opened
            active = len(self._controllers)
        self.logger.info("Session opened: #%s active=%s", number, active)
        self._preload_library(controller)
        return controller

    def _preload_library(self, controller: SessionController) -> None:
        if not self.config.library_preload:
            return
        if self.config.library_preload_async:
            controller.submit(controller.refresh_library)
            self.logger.debug("Started asynchronous library preload")
        else:
            controller.refresh_library()

    def close(self, controller: SessionController | None) -> None:
        if controller is None:
            return
        with self._lock:
            self._controllers.discard(controller)
            active = len(self._controllers)
        controller.shutdown(wait=False)
        controller.session.playback.clear()
        self.logger.info("Session closed: active=%s", active)

    def shutdown(self) -> None:
        with self._lock:
            controllers = list(self._controllers)
            self._controllers.clear()
        for controller in controllers:
            try:
                controller.shutdown(wait=True)
            except Exception:
                self.logger.exception("Session shutdown failed")
            controller.session.playback.clear()
