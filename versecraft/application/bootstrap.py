"""Application bootstrap assembly for service, sessions, and UI."""
from __future__ import annotations

from dataclasses import dataclass

import gradio as gr

from ..config import AppConfig
from ..integrations.generator_api import GeneratorApiClient
from ..storage.audio_writer import AudioArtifactWriter
from ..ui.gradio_app import create_gradio_app
from .ports import GeneratorServicePort
from .sessions import SessionRegistry
from .ui_hooks import UiHooks


@dataclass(frozen=True)
class AppServices:
    api_client: GeneratorServicePort
    audio_writer: AudioArtifactWriter
    sessions: SessionRegistry
    app: gr.Blocks


def initialize_app_services(
    *,
    config: AppConfig,
    logger,
    api_client: GeneratorServicePort | None = None,
) -> AppServices:
    """Construct all runtime services and return a typed service bundle."""
    if api_client is None:
        api_client = GeneratorApiClient(
            config.backend_url,
            timeout=config.request_timeout_seconds,
            logger_instance=logger,
        )
    logger.info("Generator service: %s", config.backend_url)
    audio_writer = AudioArtifactWriter(config.output_dir, logger)
    sessions = SessionRegistry(
        config=config,
        service=api_client,
        logger=logger,
        audio_writer=audio_writer,
        ui_hooks=UiHooks(warn=gr.Warning, info=gr.Info),
    )
    app = create_gradio_app(config=config, logger=logger, sessions=sessions)
    return AppServices(
        api_client=api_client,
        audio_writer=audio_writer,
        sessions=sessions,
        app=app,
    )
