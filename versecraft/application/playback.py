"""Lifecycle of the synthesized audio artifact."""
from __future__ import annotations

import threading

from ..constants import AUDIO_DOWNLOAD_STEM
from ..domain.audio import AudioArtifact
from ..storage.audio_writer import AudioArtifactWriter


class PlaybackController:
    """Holds at most one audio artifact and the file that exposes it.

    Replacing or clearing the artifact drops the previous one; its file is
    removed so the output folder never holds more than the current take.
    """

    def __init__(self, writer: AudioArtifactWriter | None, logger) -> None:
        self.writer = writer
        self.logger = logger
        self._lock = threading.Lock()
        self._artifact: AudioArtifact | None = None
        self._path: str | None = None

    @property
    def artifact(self) -> AudioArtifact | None:
        with self._lock:
            return self._artifact

    @property
    def path(self) -> str | None:
        with self._lock:
            return self._path

    @property
    def has_audio(self) -> bool:
        return self.artifact is not None

    @property
    def download_name(self) -> str | None:
        artifact = self.artifact
        if artifact is None:
            return None
        return f"{AUDIO_DOWNLOAD_STEM}.{artifact.extension}"

    def store(self, artifact: AudioArtifact) -> str | None:
        """Write ``artifact`` to the output folder without adopting it.

        Raises ``OSError`` when the file cannot be written.
        """
        if self.writer is None:
            return None
        return self.writer.save(artifact)

    def install(self, artifact: AudioArtifact, path: str | None) -> None:
        with self._lock:
            previous_path = self._path
            self._artifact = artifact
            self._path = path
        self.discard(previous_path)
        self.logger.info(
            "Audio ready: mime=%s bytes=%s path=%s",
            artifact.mime_type,
            artifact.size,
            path,
        )

    def replace(self, artifact: AudioArtifact) -> str | None:
        path = self.store(artifact)
        self.install(artifact, path)
        return path

    def clear(self) -> None:
        with self._lock:
            previous_path = self._path
            self._artifact = None
            self._path = None
        self.discard(previous_path)

    def discard(self, path: str | None) -> None:
        if path and self.writer is not None:
            self.writer.delete(path)
