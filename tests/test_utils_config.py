import os

from versecraft.config import load_config
from versecraft.utils import clamp, env_flag, parse_float_env, parse_int_env, resolve_path


def test_resolve_path_handles_relative_and_absolute(tmp_path):
    base_dir = str(tmp_path)
    relative = "nested/file.txt"
    absolute = str(tmp_path / "absolute.txt")

    assert resolve_path(relative, base_dir) == os.path.join(base_dir, relative)
    assert resolve_path(absolute, base_dir) == absolute


def test_parse_int_env_applies_default_and_bounds(monkeypatch):
    monkeypatch.setenv("INT_ENV_TEST", "not-a-number")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 7

    monkeypatch.setenv("INT_ENV_TEST", "100")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 10

    monkeypatch.setenv("INT_ENV_TEST", "-5")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 1


def test_parse_float_env_and_flags(monkeypatch):
    monkeypatch.setenv("FLOAT_ENV_TEST", "oops")
    assert parse_float_env("FLOAT_ENV_TEST", 1.5, min_value=0.0, max_value=2.0) == 1.5
    monkeypatch.setenv("FLOAT_ENV_TEST", "9.5")
    assert parse_float_env("FLOAT_ENV_TEST", 1.5, min_value=0.0, max_value=2.0) == 2.0

    monkeypatch.setenv("FLAG_ENV_TEST", " Yes ")
    assert env_flag("FLAG_ENV_TEST") is True
    monkeypatch.delenv("FLAG_ENV_TEST")
    assert env_flag("FLAG_ENV_TEST") is False
    assert env_flag("FLAG_ENV_TEST", "1") is True
    assert clamp(5, 1, 3) == 3


def test_load_config_reads_env_and_clamps(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("FILE_LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "outputs"))
    monkeypatch.delenv("BACKEND_URL", raising=False)
    monkeypatch.setenv("VITE_BACKEND_URL", "http://ngram.local:9000/")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "5000")  # above max -> clamped
    monkeypatch.setenv("NOTICE_HISTORY_LIMIT", "-3")  # below min -> clamped
    monkeypatch.setenv("LIBRARY_PRELOAD", "0")
    monkeypatch.setenv("LIBRARY_PRELOAD_ASYNC", "true")
    monkeypatch.setenv("DEFAULT_TITLE", "   ")
    monkeypatch.setenv("DEFAULT_LENGTH", "10")  # below min -> clamped
    monkeypatch.setenv("DEFAULT_ORDER", "42")  # above max -> clamped
    monkeypatch.setenv("DEFAULT_TEMPERATURE", "0.75")
    monkeypatch.setenv("DEFAULT_VOICE", "MALE")
    monkeypatch.setenv("DEFAULT_LANGUAGE", "klingon")

    config = load_config()

    assert config.log_level == "WARNING"
    assert config.file_log_level == "ERROR"
    assert os.path.isdir(config.log_dir)
    assert config.log_file.startswith(config.log_dir)
    assert config.backend_url == "http://ngram.local:9000"
    assert config.request_timeout_seconds == 600.0
    assert config.output_dir_abs == os.path.abspath(str(tmp_path / "outputs"))
    assert config.notice_history_limit == 0
    assert config.library_preload is False
    assert config.library_preload_async is True
    assert config.default_title == "My Corpus"
    assert config.default_length == 50
    assert config.default_order == 10
    assert config.default_temperature == 0.75
    assert config.default_voice == "male"
    assert config.default_language == "en"


def test_load_config_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BACKEND_URL", "http://primary:8000")
    monkeypatch.setenv("VITE_BACKEND_URL", "http://ignored:8000")
    for name in (
        "REQUEST_TIMEOUT_SECONDS",
        "NOTICE_HISTORY_LIMIT",
        "LIBRARY_PRELOAD",
        "LIBRARY_PRELOAD_ASYNC",
        "DEFAULT_LENGTH",
        "DEFAULT_ORDER",
    ):
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.backend_url == "http://primary:8000"
    assert config.request_timeout_seconds is None
    assert config.notice_history_limit == 20
    assert config.library_preload is True
    assert config.library_preload_async is False
    assert (config.default_length, config.default_order) == (240, 3)
