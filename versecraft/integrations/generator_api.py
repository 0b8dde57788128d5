"""HTTP client for the remote n-gram generator and speech service."""
from __future__ import annotations

import base64
import binascii
import json
import logging
import urllib.error
import urllib.request
from typing import Any

from ..constants import DEFAULT_AUDIO_MIME_TYPE
from ..domain.audio import AudioArtifact
from ..domain.corpus import CorpusRecord
from ..domain.errors import ServiceError, TransportError
from ..domain.requests import (
    ConnectionReport,
    CorpusDraft,
    GenerationRequest,
    GenerationResult,
    SpeechRequest,
)

logger = logging.getLogger(__name__)


def _normalize_base_url(base_url: str) -> str:
    normalized = (base_url or "").strip().rstrip("/")
    if not normalized:
        raise TransportError("Generator service URL is empty.")
    return normalized


def extract_error_detail(raw_body: str) -> str | None:
    """Pull a human-readable ``detail`` out of an error response body."""
    text = (raw_body or "").strip()
    if not text:
        return None
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict):
        return None
    detail = payload.get("detail")
    if isinstance(detail, str):
        return detail.strip() or None
    if isinstance(detail, list):
        # FastAPI request validation errors.
        messages: list[str] = []
        for item in detail:
            if isinstance(item, dict) and item.get("msg"):
                location = ".".join(str(part) for part in item.get("loc", []) if part != "body")
                message = str(item["msg"])
                messages.append(f"{location}: {message}" if location else message)
            elif isinstance(item, str):
                messages.append(item)
        return "; ".join(messages) or None
    return None


class GeneratorApiClient:
    """Wrapper around the generator service endpoints."""

    def __init__(self, base_url: str, timeout: float | None = None, logger_instance=None) -> None:
        self.base_url = _normalize_base_url(base_url)
        self.timeout = timeout
        self.logger = logger_instance or logger

    def _request_timeout(self) -> float | None:
        try:
            request_timeout = float(self.timeout) if self.timeout is not None else None
        except (TypeError, ValueError):
            request_timeout = None
        if request_timeout is not None and request_timeout <= 0:
            request_timeout = None
        return request_timeout

    def _request_json(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        endpoint = f"{self.base_url}{path}"
        headers = {"Accept": "application/json"}
        body = None
        if payload is not None:
            body = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        http_request = urllib.request.Request(
            endpoint,
            data=body,
            headers=headers,
            method=method,
        )
        request_timeout = self._request_timeout()
        self.logger.debug("%s %s", method, endpoint)
        try:
            if request_timeout is None:
                response_ctx = urllib.request.urlopen(http_request)
            else:
                response_ctx = urllib.request.urlopen(http_request, timeout=request_timeout)
            with response_ctx as response:
                raw_response = response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            error_payload = exc.read().decode("utf-8", errors="replace")
            detail = extract_error_detail(error_payload)
            self.logger.debug("%s %s -> HTTP %s: %s", method, endpoint, exc.code, detail)
            raise ServiceError(
                detail or f"Generator service HTTP {exc.code}",
                detail=detail,
                status_code=exc.code,
            ) from exc
        except urllib.error.URLError as exc:
            raise TransportError(f"Failed to reach generator service: {endpoint}") from exc
        except TimeoutError as exc:
            raise TransportError("Generator service request timed out.") from exc
        except OSError as exc:
            raise TransportError(f"Generator service connection error: {exc}") from exc

        try:
            return json.loads(raw_response)
        except json.JSONDecodeError as exc:
            raise TransportError("Generator service returned invalid JSON.") from exc

    def list_corpora(self) -> list[CorpusRecord]:
        data = self._request_json("GET", "/corpus")
        if data is None:
            return []
        if not isinstance(data, list):
            raise TransportError("Corpus list response must be a JSON array.")
        records: list[CorpusRecord] = []
        for item in data:
            try:
                records.append(CorpusRecord.from_payload(item))
            except ValueError as exc:
                raise TransportError(f"Invalid corpus entry: {exc}") from exc
        return records

    def create_corpus(self, draft: CorpusDraft) -> CorpusRecord:
        data = self._request_json("POST", "/corpus", draft.to_payload())
        try:
            return CorpusRecord.from_payload(data)
        except ValueError as exc:
            raise TransportError(f"Invalid corpus response: {exc}") from exc

    def generate(self, request: GenerationRequest) -> GenerationResult:
        data = self._request_json("POST", "/generate", request.to_payload())
        if not isinstance(data, dict):
            raise TransportError("Generate response must be a JSON object.")
        output = data.get("output", data.get("result"))
        if not isinstance(output, str):
            raise TransportError("Generate response has no output text.")
        used_corpus_id = data.get("used_corpus_id")
        meta = data.get("meta")
        return GenerationResult(
            text=output,
            used_corpus_id=str(used_corpus_id) if used_corpus_id else None,
            meta=dict(meta) if isinstance(meta, dict) else {},
        )

    def synthesize_speech(self, request: SpeechRequest) -> AudioArtifact:
        data = self._request_json("POST", "/tts", request.to_payload())
        if not isinstance(data, dict):
            raise TransportError("Speech response must be a JSON object.")
        encoded = data.get("audio_base64")
        if not isinstance(encoded, str) or not encoded:
            raise TransportError("Speech response has no audio payload.")
        try:
            audio = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise TransportError("Speech response audio payload is not valid base64.") from exc
        mime_type = str(data.get("mime_type") or DEFAULT_AUDIO_MIME_TYPE)
        return AudioArtifact(data=audio, mime_type=mime_type)

    def check_connection(self) -> ConnectionReport:
        try:
            data = self._request_json("GET", "/test")
        except (ServiceError, TransportError) as exc:
            return ConnectionReport(backend_ok=False, error=str(exc))
        if not isinstance(data, dict):
            return ConnectionReport(backend_ok=False, error="Unexpected connection test payload.")
        collections = data.get("collections")
        return ConnectionReport(
            backend_ok=str(data.get("backend", "")).lower() == "ok",
            database_ok=bool(data.get("db")),
            database_name=str(data["db_name"]) if data.get("db_name") else None,
            collections=tuple(str(name) for name in collections)
            if isinstance(collections, list)
            else (),
            error=str(data["db_error"]) if data.get("db_error") else None,
        )
