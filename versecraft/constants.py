"""Shared constants for session parameters and audio artifacts."""
from __future__ import annotations

DEFAULT_BACKEND_URL = "http://localhost:8000"

MIN_ORDER = 1
MAX_ORDER = 10
MIN_LENGTH = 50
MAX_LENGTH = 2000
LENGTH_STEP = 10
MIN_TEMPERATURE = 0.2
MAX_TEMPERATURE = 2.5
TEMPERATURE_STEP = 0.05
MIN_BPM = 40
MAX_BPM = 240

DEFAULT_TITLE = "My Corpus"
UNTITLED = "Untitled"
DEFAULT_SOURCE_TEXT = "You are the sunlight in my room,\nA quiet bloom at afternoon."

CORPUS_TYPE_CHOICES: list[tuple[str, str]] = [
    ("Lyrics", "lyrics"),
    ("Poem", "poem"),
    ("Generic", "generic"),
]
GENRE_CHOICES: list[tuple[str, str]] = [
    ("Pop", "pop"),
    ("Hip-hop", "hiphop"),
    ("Jazz", "jazz"),
    ("Rock", "rock"),
    ("Lo-fi", "lofi"),
]
FLOW_CHOICES: list[tuple[str, str]] = [
    ("Smooth", "smooth"),
    ("Rapid", "rapid"),
    ("Storytelling", "story"),
    ("Punchy", "punchy"),
]
MOOD_CHOICES: list[tuple[str, str]] = [
    ("Chill", "chill"),
    ("Happy", "happy"),
    ("Moody", "sad"),
    ("Epic", "epic"),
]
VOICE_CHOICES: list[tuple[str, str]] = [
    ("Female", "female"),
    ("Male", "male"),
]
LANGUAGE_CHOICES: list[tuple[str, str]] = [
    ("English", "en"),
    ("English (UK)", "en-uk"),
    ("English (AU)", "en-au"),
    ("Hindi", "hi"),
    ("Spanish", "es"),
    ("French", "fr"),
    ("German", "de"),
    ("Japanese", "ja"),
]

AUDIO_EXTENSIONS: dict[str, str] = {
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}
DEFAULT_AUDIO_MIME_TYPE = "audio/mpeg"
AUDIO_DOWNLOAD_STEM = "song"
