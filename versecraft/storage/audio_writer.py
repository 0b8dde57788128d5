"""Session-scoped audio files for playback and download."""
from __future__ import annotations

import os
import uuid
from datetime import datetime

from ..constants import AUDIO_DOWNLOAD_STEM
from ..domain.audio import AudioArtifact


class AudioArtifactWriter:
    def __init__(self, output_dir: str, logger) -> None:
        self.output_dir = output_dir
        self.output_dir_abs = os.path.abspath(output_dir)
        self.logger = logger
        os.makedirs(self.output_dir, exist_ok=True)
        self.logger.info("Output dir: %s", self.output_dir)

    def _records_dir(self) -> str:
        records_dir = os.path.join(
            self.output_dir,
            datetime.now().strftime("%Y-%m-%d"),
            "records",
        )
        os.makedirs(records_dir, exist_ok=True)
        return records_dir

    def _is_within_output_dir(self, path: str) -> bool:
        try:
            return os.path.commonpath([path, self.output_dir_abs]) == self.output_dir_abs
        except ValueError:
            return False

    def build_output_path(self, extension: str) -> str:
        stamp = datetime.now().strftime("%H%M%S")
        filename = f"{AUDIO_DOWNLOAD_STEM}_{stamp}_{uuid.uuid4().hex[:8]}.{extension}"
        return os.path.join(self._records_dir(), filename)

    def save(self, artifact: AudioArtifact) -> str:
        path = self.build_output_path(artifact.extension)
        with open(path, "wb") as handle:
            handle.write(artifact.data)
        self.logger.debug("Saved audio artifact: %s (%s bytes)", path, artifact.size)
        return path

    def delete(self, path: str | None) -> bool:
        if not path:
            return False
        abs_path = os.path.abspath(path)
        if not self._is_within_output_dir(abs_path):
            self.logger.warning("Skip delete outside output dir: %s", path)
            return False
        try:
            if os.path.isfile(abs_path):
                os.remove(abs_path)
                return True
        except OSError:
            self.logger.exception("Failed to delete audio artifact: %s", path)
        return False
