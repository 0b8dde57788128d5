"""Single-slot operation status with an optional notice log."""
from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StatusKind(Enum):
    IDLE = "idle"
    BUSY = "busy"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OperationStatus:
    kind: StatusKind
    message: str = ""

    @classmethod
    def idle(cls) -> "OperationStatus":
        return cls(StatusKind.IDLE)

    @classmethod
    def busy(cls, description: str) -> "OperationStatus":
        return cls(StatusKind.BUSY, description)

    @classmethod
    def succeeded(cls, description: str) -> "OperationStatus":
        return cls(StatusKind.SUCCEEDED, description)

    @classmethod
    def failed(cls, reason: str) -> "OperationStatus":
        return cls(StatusKind.FAILED, reason)

    @property
    def is_busy(self) -> bool:
        return self.kind is StatusKind.BUSY

    @property
    def is_terminal(self) -> bool:
        return self.kind in (StatusKind.SUCCEEDED, StatusKind.FAILED)


@dataclass(frozen=True)
class NoticeEntry:
    timestamp: datetime
    kind: StatusKind
    message: str


class StatusSurface:
    """Holds the latest status; every write overwrites the previous one."""

    def __init__(self, history_limit: int = 0) -> None:
        self._lock = threading.Lock()
        self._current = OperationStatus.idle()
        self._history: deque[NoticeEntry] = deque(maxlen=max(0, int(history_limit)))

    @property
    def current(self) -> OperationStatus:
        with self._lock:
            return self._current

    @property
    def notice(self) -> str:
        return self.current.message

    def set(self, status: OperationStatus) -> None:
        with self._lock:
            self._current = status
            if self._history.maxlen and status.kind is not StatusKind.IDLE:
                self._history.append(NoticeEntry(datetime.now(), status.kind, status.message))

    def clear(self) -> None:
        with self._lock:
            self._current = OperationStatus.idle()

    def history(self) -> list[NoticeEntry]:
        with self._lock:
            return list(self._history)
