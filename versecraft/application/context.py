"""Runtime dependency container for the application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import AppConfig
    from .bootstrap import AppServices


@dataclass
class AppContext:
    """Holds runtime dependencies assembled at startup."""

    config: "AppConfig"
    logger: Any
    skip_app_init: bool
    api_client: Any = None
    audio_writer: Any = None
    sessions: Any = None
    app: Any = None

    def bind_services(self, services: "AppServices") -> None:
        self.api_client = services.api_client
        self.audio_writer = services.audio_writer
        self.sessions = services.sessions
        self.app = services.app
