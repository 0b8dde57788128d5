"""User interface layer."""

from .common import (
    APP_TITLE,
    LIBRARY_NOTE,
    PARAMETER_NOTE,
    format_connection_report,
    format_generation_meta,
    format_notice_log,
    format_status,
    library_choices,
)
from .gradio_app import apply_form_values, create_gradio_app

__all__ = [
    "APP_TITLE",
    "LIBRARY_NOTE",
    "PARAMETER_NOTE",
    "apply_form_values",
    "create_gradio_app",
    "format_connection_report",
    "format_generation_meta",
    "format_notice_log",
    "format_status",
    "library_choices",
]
