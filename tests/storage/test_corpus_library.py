import pytest

from versecraft.domain.corpus import CorpusRecord
from versecraft.domain.errors import TransportError
from versecraft.storage.corpus_library import CorpusLibrary


def _record(corpus_id, title="Song"):
    return CorpusRecord(id=corpus_id, title=title)


def test_refresh_replaces_records_in_server_order():
    library = CorpusLibrary()
    assert library.loaded is False

    records = library.refresh(lambda: [_record("b"), _record("a")])

    assert [record.id for record in records] == ["b", "a"]
    assert [record.id for record in library.records()] == ["b", "a"]
    assert library.loaded is True
    assert len(library) == 2


def test_refresh_failure_leaves_cache_untouched():
    library = CorpusLibrary()
    library.replace([_record("a")])

    def failing():
        raise TransportError("refused")

    with pytest.raises(TransportError):
        library.refresh(failing)
    assert [record.id for record in library.records()] == ["a"]


def test_append_puts_newest_first_and_replaces_same_id():
    library = CorpusLibrary()
    library.replace([_record("a"), _record("b")])

    library.append(_record("c"))
    library.append(_record("b", title="Renamed"))

    assert [record.id for record in library.records()] == ["b", "c", "a"]
    assert library.get("b").title == "Renamed"


def test_selection_is_an_id_pointer():
    library = CorpusLibrary()
    library.select("missing")

    assert library.selected() == "missing"
    assert library.selected_record() is None

    library.replace([_record("missing", title="Now here")])
    assert library.selected_record().title == "Now here"

    library.select("")
    assert library.selected() is None
    assert library.get(None) is None
