"""Local mirror of the remote corpus list."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable

from ..domain.corpus import CorpusRecord

logger = logging.getLogger(__name__)


class CorpusLibrary:
    """Read-mostly cache of corpus records with a single selection pointer.

    Records are kept most-recent-first. Entries are never deleted locally; a
    refresh replaces the whole set. The selection is an id only and is not
    checked against the cached records.
    """

    def __init__(self, logger_instance=None) -> None:
        self.logger = logger_instance or logger
        self._lock = threading.Lock()
        self._records: list[CorpusRecord] = []
        self._selected_id: str | None = None
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def records(self) -> list[CorpusRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def get(self, corpus_id: str | None) -> CorpusRecord | None:
        if corpus_id is None:
            return None
        with self._lock:
            for record in self._records:
                if record.id == corpus_id:
                    return record
        return None

    def replace(self, records: Iterable[CorpusRecord]) -> None:
        fresh = list(records)
        with self._lock:
            self._records = fresh
            self._loaded = True
        self.logger.debug("Corpus library replaced: records=%s", len(fresh))

    def refresh(self, list_corpora: Callable[[], list[CorpusRecord]]) -> list[CorpusRecord]:
        """Replace the cache with a fresh listing.

        The cache is left untouched when ``list_corpora`` raises.
        """
        records = list_corpora()
        self.replace(records)
        return list(records)

    def append(self, record: CorpusRecord) -> None:
        with self._lock:
            self._records = [record] + [item for item in self._records if item.id != record.id]
        self.logger.debug("Corpus library append: id=%s", record.id)

    def select(self, corpus_id: str | None) -> None:
        with self._lock:
            self._selected_id = corpus_id or None

    def selected(self) -> str | None:
        with self._lock:
            return self._selected_id

    def selected_record(self) -> CorpusRecord | None:
        return self.get(self.selected())
