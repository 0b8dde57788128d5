from datetime import datetime, timezone

import pytest

from versecraft.domain.audio import AudioArtifact, extension_for_mime
from versecraft.domain.corpus import CorpusRecord, parse_timestamp
from versecraft.domain.parameters import (
    SessionParameters,
    StyleKnobs,
    clamp_parameters,
    has_enough_text,
    normalize_choice,
)
from versecraft.domain.requests import (
    CorpusDraft,
    GenerationRequest,
    SpeechRequest,
)


def test_has_enough_text_uses_trimmed_length():
    assert has_enough_text("ab", 3) is False
    assert has_enough_text("   abc   ", 3) is False
    assert has_enough_text("abcd", 3) is True
    assert has_enough_text("a a a a a", 1) is True
    assert has_enough_text(None, 1) is False


def test_update_routes_style_fields_and_rejects_unknown_names():
    params = SessionParameters()
    params.update(title="Night", genre="jazz", bpm=90, slow=True)

    assert params.title == "Night"
    assert params.style.genre == "jazz"
    assert params.style.bpm == 90
    assert params.style.slow is True
    with pytest.raises(AttributeError):
        params.update(tempo=120)


def test_snapshot_is_independent_from_live_parameters():
    params = SessionParameters()
    snapshot = params.snapshot()
    params.update(voice="male", order=5)

    assert snapshot.style.voice == "female"
    assert snapshot.order == 3


def test_clamp_parameters_applies_advisory_bounds():
    params = SessionParameters(length=5000, order=0, temperature=9.0, corpus_type="novel")
    params.style.bpm = 10

    clamped = clamp_parameters(params)

    assert (clamped.length, clamped.order, clamped.temperature) == (2000, 1, 2.5)
    assert clamped.style.bpm == 40
    assert clamped.corpus_type == "lyrics"
    assert params.length == 5000


def test_style_knobs_from_mapping_normalizes_choices():
    knobs = StyleKnobs.from_mapping({"genre": "ROCK", "mood": "angry", "bpm": "120", "slow": "yes"})

    assert knobs.genre == "rock"
    assert knobs.mood == "chill"
    assert knobs.bpm == 120
    assert knobs.slow is True
    assert normalize_choice(" Male ", [("Male", "male")], "female") == "male"


def test_generation_request_requires_exactly_one_source():
    with pytest.raises(ValueError):
        GenerationRequest(length=100, order=2, temperature=1.0)
    with pytest.raises(ValueError):
        GenerationRequest(length=100, order=2, temperature=1.0, text="x", corpus_id="c")


def test_generation_request_payload_from_parameters():
    params = SessionParameters(source_text="hello there", seed="")
    payload = GenerationRequest.from_parameters(params).to_payload()

    assert payload["text"] == "hello there"
    assert payload["seed"] is None
    assert payload["genre"] == "pop"
    assert "corpus_id" not in payload

    params.update(seed="42")
    payload = GenerationRequest.from_parameters(params, corpus_id="c-1").to_payload()
    assert payload["corpus_id"] == "c-1"
    assert payload["seed"] == "42"
    assert "text" not in payload


def test_corpus_draft_and_speech_request_payloads():
    params = SessionParameters(title=" ", source_text="words", corpus_type="generic")
    params.update(voice="male", language="fr", slow=True)

    assert CorpusDraft.from_parameters(params).to_payload() == {
        "title": "Untitled",
        "text": "words",
        "type": "generic",
    }
    assert SpeechRequest.from_parameters("sing", params).to_payload() == {
        "text": "sing",
        "voice": "male",
        "language": "fr",
        "slow": True,
    }


def test_corpus_record_from_payload():
    record = CorpusRecord.from_payload(
        {"_id": "abc", "title": "", "created_at": "2024-05-01T10:00:00Z", "type": "poem"}
    )

    assert record.id == "abc"
    assert record.title == "Untitled"
    assert record.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert record.label() == "Untitled · poem · 2024-05-01 10:00"
    assert parse_timestamp("not a date") is None
    with pytest.raises(ValueError):
        CorpusRecord.from_payload({"title": "no id"})


def test_audio_artifact_mime_handling():
    artifact = AudioArtifact(data=b"\x00\x01", mime_type="audio/wav; codecs=1")

    assert artifact.extension == "wav"
    assert artifact.size == 2
    assert artifact.data_uri() == "data:audio/wav; codecs=1;base64,AAE="
    assert extension_for_mime(None) == "mp3"
    assert extension_for_mime("audio/x-unknown") == "mp3"
