"""Corpus records owned by the remote store."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from ..constants import UNTITLED


def parse_timestamp(value: Any) -> datetime | None:
    text = str(value or "").strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class CorpusRecord:
    id: str
    title: str
    created_at: datetime | None = None
    kind: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CorpusRecord":
        """Build a record from a server payload without inventing missing fields."""
        if not isinstance(payload, Mapping):
            raise ValueError("Corpus payload must be an object.")
        raw_id = payload.get("id", payload.get("_id"))
        if raw_id is None or not str(raw_id).strip():
            raise ValueError("Corpus payload is missing an id.")
        kind = payload.get("type")
        return cls(
            id=str(raw_id).strip(),
            title=str(payload.get("title") or UNTITLED),
            created_at=parse_timestamp(payload.get("created_at")),
            kind=str(kind) if kind else None,
        )

    def label(self) -> str:
        parts = [self.title]
        if self.kind:
            parts.append(self.kind)
        if self.created_at is not None:
            parts.append(self.created_at.strftime("%Y-%m-%d %H:%M"))
        return " · ".join(parts)
