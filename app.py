"""Entrypoint and runtime facade for the VerseCraft app."""

from __future__ import annotations

import atexit
import platform
import sys

from versecraft.application.bootstrap import initialize_app_services
from versecraft.application.context import AppContext
from versecraft.config import load_config
from versecraft.logging_config import setup_logging
from versecraft.utils import env_flag

CONFIG = load_config()
logger = setup_logging(CONFIG)

SKIP_APP_INIT = env_flag("VERSECRAFT_SKIP_APP_INIT")

logger.info("Starting app")
logger.info("Log file: %s", CONFIG.log_file)
logger.debug(
    "Log config: LOG_LEVEL=%s FILE_LOG_LEVEL=%s LOG_DIR=%s OUTPUT_DIR=%s BACKEND_URL=%s "
    "REQUEST_TIMEOUT_SECONDS=%s NOTICE_HISTORY_LIMIT=%s LIBRARY_PRELOAD=%s "
    "LIBRARY_PRELOAD_ASYNC=%s",
    CONFIG.log_level,
    CONFIG.file_log_level,
    CONFIG.log_dir,
    CONFIG.output_dir,
    CONFIG.backend_url,
    CONFIG.request_timeout_seconds,
    CONFIG.notice_history_limit,
    CONFIG.library_preload,
    CONFIG.library_preload_async,
)
logger.debug("Python version: %s", sys.version.replace("\n", " "))
logger.debug("Platform: %s", platform.platform())

APP_CONTEXT = AppContext(
    config=CONFIG,
    logger=logger,
    skip_app_init=SKIP_APP_INIT,
)
app = APP_CONTEXT.app

if not SKIP_APP_INIT:
    services = initialize_app_services(config=CONFIG, logger=logger)
    APP_CONTEXT.bind_services(services)
    app = APP_CONTEXT.app
else:
    logger.info("VERSECRAFT_SKIP_APP_INIT enabled; skipping service and UI initialization")


def _shutdown_runtime() -> None:
    sessions = APP_CONTEXT.sessions
    if sessions is None:
        return
    try:
        sessions.shutdown()
    except Exception:
        logger.exception("Runtime shutdown failed")


atexit.register(_shutdown_runtime)


def launch() -> None:
    if SKIP_APP_INIT:
        logger.info("VERSECRAFT_SKIP_APP_INIT enabled; launch skipped")
        return
    if APP_CONTEXT.app is None:
        raise RuntimeError("Gradio app is not initialized.")
    logger.info("Launching Gradio app")
    APP_CONTEXT.app.launch()


if __name__ == "__main__":
    launch()
