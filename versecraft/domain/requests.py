"""Request and response shapes exchanged with the generator service."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..constants import UNTITLED
from .parameters import SessionParameters


@dataclass(frozen=True)
class CorpusDraft:
    title: str
    text: str
    kind: str | None = None

    @classmethod
    def from_parameters(cls, params: SessionParameters) -> "CorpusDraft":
        return cls(
            title=params.title.strip() or UNTITLED,
            text=params.source_text,
            kind=params.corpus_type or None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"title": self.title, "text": self.text}
        if self.kind:
            payload["type"] = self.kind
        return payload


@dataclass(frozen=True)
class GenerationRequest:
    """A generate call; exactly one of text and corpus_id is set."""

    length: int
    order: int
    temperature: float
    text: str | None = None
    corpus_id: str | None = None
    seed: str | None = None
    genre: str | None = None
    flow: str | None = None
    bpm: int | None = None
    mood: str | None = None
    voice: str | None = None
    language: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.corpus_id is None):
            raise ValueError("Provide exactly one of text or corpus_id.")

    @classmethod
    def from_parameters(
        cls,
        params: SessionParameters,
        *,
        corpus_id: str | None = None,
    ) -> "GenerationRequest":
        style = params.style
        return cls(
            length=params.length,
            order=params.order,
            temperature=params.temperature,
            text=None if corpus_id is not None else params.source_text,
            corpus_id=corpus_id,
            seed=params.seed_or_none(),
            genre=style.genre,
            flow=style.flow,
            bpm=style.bpm,
            mood=style.mood,
            voice=style.voice,
            language=style.language,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "length": self.length,
            "order": self.order,
            "temperature": self.temperature,
            "seed": self.seed,
        }
        if self.corpus_id is not None:
            payload["corpus_id"] = self.corpus_id
        else:
            payload["text"] = self.text
        for name in ("genre", "flow", "bpm", "mood", "voice", "language"):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        return payload


@dataclass(frozen=True)
class GenerationResult:
    text: str
    used_corpus_id: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SpeechRequest:
    text: str
    voice: str = "female"
    language: str = "en"
    slow: bool = False

    @classmethod
    def from_parameters(cls, text: str, params: SessionParameters) -> "SpeechRequest":
        return cls(
            text=text,
            voice=params.style.voice,
            language=params.style.language,
            slow=bool(params.style.slow),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "voice": self.voice,
            "language": self.language,
            "slow": self.slow,
        }


@dataclass(frozen=True)
class ConnectionReport:
    backend_ok: bool
    database_ok: bool = False
    database_name: str | None = None
    collections: tuple[str, ...] = ()
    error: str | None = None
