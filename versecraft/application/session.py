"""The explicit session object shared by action handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import AppConfig
from ..domain.parameters import SessionParameters, StyleKnobs
from ..storage.audio_writer import AudioArtifactWriter
from ..storage.corpus_library import CorpusLibrary
from .playback import PlaybackController
from .status import StatusSurface


@dataclass
class SessionOutcome:
    generated_text: str = ""
    used_corpus_id: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def clear(self) -> None:
        self.generated_text = ""
        self.used_corpus_id = None
        self.meta = {}


@dataclass
class GenerationSession:
    parameters: SessionParameters
    library: CorpusLibrary
    status: StatusSurface
    playback: PlaybackController
    outcome: SessionOutcome = field(default_factory=SessionOutcome)

    @classmethod
    def create(
        cls,
        *,
        logger,
        parameters: SessionParameters | None = None,
        audio_writer: AudioArtifactWriter | None = None,
        history_limit: int = 0,
    ) -> "GenerationSession":
        return cls(
            parameters=parameters or SessionParameters(),
            library=CorpusLibrary(logger_instance=logger),
            status=StatusSurface(history_limit),
            playback=PlaybackController(audio_writer, logger),
        )


def default_parameters(config: AppConfig) -> SessionParameters:
    return SessionParameters(
        title=config.default_title,
        length=config.default_length,
        order=config.default_order,
        temperature=config.default_temperature,
        style=StyleKnobs(voice=config.default_voice, language=config.default_language),
    )
