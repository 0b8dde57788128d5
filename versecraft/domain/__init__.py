"""Domain types for generation sessions."""

from .audio import AudioArtifact, extension_for_mime
from .corpus import CorpusRecord, parse_timestamp
from .errors import ServiceError, SessionError, TransportError, ValidationError
from .parameters import (
    SessionParameters,
    StyleKnobs,
    clamp_parameters,
    has_enough_text,
    normalize_choice,
)
from .requests import (
    ConnectionReport,
    CorpusDraft,
    GenerationRequest,
    GenerationResult,
    SpeechRequest,
)

__all__ = [
    "AudioArtifact",
    "ConnectionReport",
    "CorpusDraft",
    "CorpusRecord",
    "GenerationRequest",
    "GenerationResult",
    "ServiceError",
    "SessionError",
    "SessionParameters",
    "SpeechRequest",
    "StyleKnobs",
    "TransportError",
    "ValidationError",
    "clamp_parameters",
    "extension_for_mime",
    "has_enough_text",
    "normalize_choice",
    "parse_timestamp",
]
