"""Session parameters and the local generation precondition."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from ..constants import (
    CORPUS_TYPE_CHOICES,
    DEFAULT_SOURCE_TEXT,
    DEFAULT_TITLE,
    FLOW_CHOICES,
    GENRE_CHOICES,
    LANGUAGE_CHOICES,
    MAX_BPM,
    MAX_LENGTH,
    MAX_ORDER,
    MAX_TEMPERATURE,
    MIN_BPM,
    MIN_LENGTH,
    MIN_ORDER,
    MIN_TEMPERATURE,
    MOOD_CHOICES,
    VOICE_CHOICES,
)
from ..utils import clamp


def normalize_choice(value: Any, choices: list[tuple[str, str]], default: str) -> str:
    candidate = str(value or "").strip().lower()
    if candidate in {choice for _, choice in choices}:
        return candidate
    return default


def _to_int(value: Any, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _to_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default


@dataclass
class StyleKnobs:
    """Stylistic controls sent with generation and synthesis requests."""

    genre: str = "pop"
    flow: str = "smooth"
    bpm: int = 100
    mood: str = "chill"
    voice: str = "female"
    language: str = "en"
    slow: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "StyleKnobs":
        """Build knobs from a partial mapping; absent or None entries take defaults."""
        defaults = cls()
        values = {key: value for key, value in (values or {}).items() if value is not None}
        return cls(
            genre=normalize_choice(values.get("genre"), GENRE_CHOICES, defaults.genre),
            flow=normalize_choice(values.get("flow"), FLOW_CHOICES, defaults.flow),
            bpm=_to_int(values.get("bpm"), defaults.bpm),
            mood=normalize_choice(values.get("mood"), MOOD_CHOICES, defaults.mood),
            voice=normalize_choice(values.get("voice"), VOICE_CHOICES, defaults.voice),
            language=normalize_choice(
                values.get("language"), LANGUAGE_CHOICES, defaults.language
            ),
            slow=_to_bool(values.get("slow"), defaults.slow),
        )


@dataclass
class SessionParameters:
    """Mutable inputs of one session.

    No validation happens here: any field may be set at any time. Actions read
    a snapshot when they are triggered, so edits made while a request is in
    flight only affect the next request.
    """

    title: str = DEFAULT_TITLE
    source_text: str = DEFAULT_SOURCE_TEXT
    corpus_type: str = "lyrics"
    length: int = 240
    order: int = 3
    temperature: float = 1.0
    seed: str = ""
    style: StyleKnobs = field(default_factory=StyleKnobs)

    def update(self, **changes: Any) -> None:
        known = {item.name for item in fields(self)}
        style_names = {item.name for item in fields(StyleKnobs)}
        for name, value in changes.items():
            if name in known:
                setattr(self, name, value)
            elif name in style_names:
                setattr(self.style, name, value)
            else:
                raise AttributeError(f"Unknown session parameter: {name}")

    def snapshot(self) -> "SessionParameters":
        return copy.deepcopy(self)

    def seed_or_none(self) -> str | None:
        return self.seed or None


def clamp_parameters(params: SessionParameters) -> SessionParameters:
    """Return a copy with numeric fields clamped to the advisory UI bounds."""
    clamped = params.snapshot()
    clamped.length = clamp(_to_int(clamped.length, 240), MIN_LENGTH, MAX_LENGTH)
    clamped.order = clamp(_to_int(clamped.order, 3), MIN_ORDER, MAX_ORDER)
    clamped.temperature = clamp(
        _to_float(clamped.temperature, 1.0), MIN_TEMPERATURE, MAX_TEMPERATURE
    )
    clamped.style.bpm = clamp(_to_int(clamped.style.bpm, 100), MIN_BPM, MAX_BPM)
    clamped.corpus_type = normalize_choice(clamped.corpus_type, CORPUS_TYPE_CHOICES, "lyrics")
    return clamped


def has_enough_text(text: str | None, order: int) -> bool:
    """True when the trimmed text is longer than the n-gram order."""
    return len((text or "").strip()) > int(order)
