"""Storage layer for the corpus cache and audio files."""

from .audio_writer import AudioArtifactWriter
from .corpus_library import CorpusLibrary

__all__ = [
    "AudioArtifactWriter",
    "CorpusLibrary",
]
