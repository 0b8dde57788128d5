"""Application layer orchestration."""

from .bootstrap import AppServices, initialize_app_services
from .context import AppContext
from .controller import SessionController, failure_message
from .playback import PlaybackController
from .ports import GeneratorServicePort
from .session import GenerationSession, SessionOutcome, default_parameters
from .sessions import SessionRegistry
from .status import NoticeEntry, OperationStatus, StatusKind, StatusSurface
from .ui_hooks import UiHooks

__all__ = [
    "AppContext",
    "AppServices",
    "GenerationSession",
    "GeneratorServicePort",
    "NoticeEntry",
    "OperationStatus",
    "PlaybackController",
    "SessionController",
    "SessionOutcome",
    "SessionRegistry",
    "StatusKind",
    "StatusSurface",
    "UiHooks",
    "default_parameters",
    "failure_message",
    "initialize_app_services",
]
