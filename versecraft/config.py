"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_BACKEND_URL,
    DEFAULT_TITLE,
    LANGUAGE_CHOICES,
    MAX_LENGTH,
    MAX_ORDER,
    MAX_TEMPERATURE,
    MIN_LENGTH,
    MIN_ORDER,
    MIN_TEMPERATURE,
    VOICE_CHOICES,
)
from .utils import env_flag, parse_float_env, parse_int_env, resolve_path


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    backend_url: str
    request_timeout_seconds: Optional[float]
    output_dir: str
    output_dir_abs: str
    notice_history_limit: int
    library_preload: bool = True
    library_preload_async: bool = False
    default_title: str = DEFAULT_TITLE
    default_length: int = 240
    default_order: int = 3
    default_temperature: float = 1.0
    default_voice: str = "female"
    default_language: str = "en"


def _choice_env(name: str, default: str, choices: list[tuple[str, str]]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value in {choice for _, choice in choices}:
        return value
    return default


def _backend_url_env() -> str:
    raw = os.getenv("BACKEND_URL") or os.getenv("VITE_BACKEND_URL") or DEFAULT_BACKEND_URL
    return raw.strip().rstrip("/") or DEFAULT_BACKEND_URL


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"app_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    backend_url = _backend_url_env()
    request_timeout_seconds: Optional[float] = parse_float_env(
        "REQUEST_TIMEOUT_SECONDS", 0.0, min_value=0.0, max_value=600.0
    )
    if request_timeout_seconds == 0:
        request_timeout_seconds = None
    output_dir = resolve_path(os.getenv("OUTPUT_DIR", "outputs"), base_dir)
    output_dir_abs = os.path.abspath(output_dir)
    notice_history_limit = parse_int_env(
        "NOTICE_HISTORY_LIMIT", 20, min_value=0, max_value=200
    )
    library_preload = env_flag("LIBRARY_PRELOAD", "1")
    library_preload_async = env_flag("LIBRARY_PRELOAD_ASYNC", "0")
    default_title = os.getenv("DEFAULT_TITLE", DEFAULT_TITLE).strip() or DEFAULT_TITLE
    default_length = parse_int_env(
        "DEFAULT_LENGTH", 240, min_value=MIN_LENGTH, max_value=MAX_LENGTH
    )
    default_order = parse_int_env(
        "DEFAULT_ORDER", 3, min_value=MIN_ORDER, max_value=MAX_ORDER
    )
    default_temperature = parse_float_env(
        "DEFAULT_TEMPERATURE",
        1.0,
        min_value=MIN_TEMPERATURE,
        max_value=MAX_TEMPERATURE,
    )
    default_voice = _choice_env("DEFAULT_VOICE", "female", VOICE_CHOICES)
    default_language = _choice_env("DEFAULT_LANGUAGE", "en", LANGUAGE_CHOICES)
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        backend_url=backend_url,
        request_timeout_seconds=request_timeout_seconds,
        output_dir=output_dir,
        output_dir_abs=output_dir_abs,
        notice_history_limit=notice_history_limit,
        library_preload=library_preload,
        library_preload_async=library_preload_async,
        default_title=default_title,
        default_length=default_length,
        default_order=default_order,
        default_temperature=default_temperature,
        default_voice=default_voice,
        default_language=default_language,
    )
