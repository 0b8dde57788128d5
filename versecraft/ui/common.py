"""UI-neutral formatting helpers shared by the Gradio UI."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Mapping

from ..domain.corpus import CorpusRecord
from ..domain.requests import ConnectionReport

if TYPE_CHECKING:
    from ..application.status import NoticeEntry, OperationStatus

APP_TITLE = "VerseCraft"

LIBRARY_NOTE = (
    "\nSaved corpora live on the generator service. Pick one to generate from it, "
    "or keep generating from the raw text on the left.\n"
)

PARAMETER_NOTE = (
    "\nThe n-gram order sets how much preceding context the model conditions on. "
    "The source text must be longer than the order.\n\n"
    "Leave the seed empty for a different take on every run.\n"
)

_STATUS_PREFIX = {
    "busy": "⏳",
    "succeeded": "✅",
    "failed": "⚠️",
}


def library_choices(records: Iterable[CorpusRecord]) -> list[tuple[str, str]]:
    return [(record.label(), record.id) for record in records]


def format_status(status: "OperationStatus") -> str:
    prefix = _STATUS_PREFIX.get(status.kind.value)
    if prefix is None or not status.message:
        return ""
    return f"{prefix} {status.message}"


def format_notice_log(entries: Iterable["NoticeEntry"]) -> str:
    lines = [
        f"- `{entry.timestamp.strftime('%H:%M:%S')}` {entry.kind.value}: {entry.message}"
        for entry in reversed(list(entries))
    ]
    return "\n".join(lines) if lines else "_No notices yet._"


def format_generation_meta(used_corpus_id: str | None, meta: Mapping[str, Any] | None) -> str:
    parts = []
    if used_corpus_id:
        parts.append(f"corpus `{used_corpus_id}`")
    for key, value in sorted((meta or {}).items()):
        parts.append(f"{key}: {value}")
    return " · ".join(parts)


def format_connection_report(report: ConnectionReport) -> str:
    if not report.backend_ok:
        return f"❌ Backend unreachable: {report.error or 'no response'}"
    lines = ["✅ Backend reachable."]
    if report.database_ok:
        name = report.database_name or "unknown"
        lines.append(f"✅ Database `{name}` connected.")
        if report.collections:
            lines.append("Collections: " + ", ".join(report.collections))
    else:
        lines.append(f"⚠️ Database unavailable: {report.error or 'not connected'}")
    return "\n\n".join(lines)
