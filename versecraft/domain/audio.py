"""Synthesized audio artifacts."""
from __future__ import annotations

import base64
from dataclasses import dataclass

from ..constants import AUDIO_EXTENSIONS, DEFAULT_AUDIO_MIME_TYPE


def extension_for_mime(mime_type: str | None) -> str:
    normalized = str(mime_type or "").split(";", 1)[0].strip().lower()
    return AUDIO_EXTENSIONS.get(normalized, "mp3")


@dataclass(frozen=True)
class AudioArtifact:
    data: bytes
    mime_type: str = DEFAULT_AUDIO_MIME_TYPE

    @property
    def extension(self) -> str:
        return extension_for_mime(self.mime_type)

    @property
    def size(self) -> int:
        return len(self.data)

    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"
