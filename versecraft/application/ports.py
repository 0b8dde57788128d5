"""Application-level port for the remote generator service."""

from __future__ import annotations

from typing import Protocol

from ..domain.audio import AudioArtifact
from ..domain.corpus import CorpusRecord
from ..domain.requests import (
    ConnectionReport,
    CorpusDraft,
    GenerationRequest,
    GenerationResult,
    SpeechRequest,
)


class GeneratorServicePort(Protocol):
    """Remote operations the session controller depends on.

    Implementations raise ``ServiceError`` or ``TransportError`` on failure.
    """

    def list_corpora(self) -> list[CorpusRecord]: ...

    def create_corpus(self, draft: CorpusDraft) -> CorpusRecord: ...

    def generate(self, request: GenerationRequest) -> GenerationResult: ...

    def synthesize_speech(self, request: SpeechRequest) -> AudioArtifact: ...

    def check_connection(self) -> ConnectionReport: ...
