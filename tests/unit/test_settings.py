from __future__ import annotations

import pytest

from src.runtime.settings import load_settings, missing_api_keys

ENV_NAMES = (
    "PROXY_HOST",
    "PROXY_PORT",
    "PROXY_DRAIN_TIMEOUT_S",
    "GLADIA_API_KEY",
    "GLADIA_API_URL",
    "GLADIA_START_TIMEOUT_S",
    "GLADIA_LANGUAGES",
    "GLADIA_CODE_SWITCHING",
    "AUDIO_SAMPLE_RATE",
    "AUDIO_CHANNELS",
    "AUDIO_BIT_DEPTH",
    "AUDIO_ENCODING",
    "MEETING_BAAS_API_KEY",
    "MEETING_BAAS_API_URL",
    "MEETING_BAAS_TIMEOUT_S",
    "TRANSCRIPT_TIMESTAMP_SOURCE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.proxy.host == "0.0.0.0"
    assert settings.proxy.port == 8765
    assert settings.audio.sample_rate == 24000
    assert settings.audio.channels == 1
    assert settings.audio.bit_depth == 16
    assert settings.audio.encoding == "wav/pcm"
    assert settings.transcription.api_url == "https://api.gladia.io"
    assert settings.transcription.languages == ("en",)
    assert settings.transcription.code_switching is False
    assert settings.transcription.start_timeout_s == 15.0
    assert settings.transcription.timestamp_source == "delivery"
    assert settings.meeting.api_url == "https://api.meetingbaas.com"
    assert missing_api_keys(settings) == ["MEETING_BAAS_API_KEY", "GLADIA_API_KEY"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROXY_PORT", "9000")
    monkeypatch.setenv("GLADIA_API_KEY", " g-key ")
    monkeypatch.setenv("MEETING_BAAS_API_KEY", "m-key")
    monkeypatch.setenv("GLADIA_API_URL", "https://eu.gladia.example/")
    monkeypatch.setenv("GLADIA_LANGUAGES", "en, fr,,de")
    monkeypatch.setenv("GLADIA_CODE_SWITCHING", "yes")
    monkeypatch.setenv("AUDIO_SAMPLE_RATE", "16000")
    monkeypatch.setenv("TRANSCRIPT_TIMESTAMP_SOURCE", "Provider")

    settings = load_settings()
    assert settings.proxy.port == 9000
    assert settings.transcription.api_key == "g-key"
    assert settings.transcription.api_url == "https://eu.gladia.example"
    assert settings.transcription.languages == ("en", "fr", "de")
    assert settings.transcription.code_switching is True
    assert settings.transcription.timestamp_source == "provider"
    assert settings.audio.sample_rate == 16000
    assert missing_api_keys(settings) == []


@pytest.mark.parametrize(
    ("name", "value"),
    [("PROXY_PORT", "70000"), ("PROXY_PORT", "abc"), ("GLADIA_START_TIMEOUT_S", "0")],
)
def test_bad_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    settings = load_settings()
    assert settings.proxy.port == 8765
    assert settings.transcription.start_timeout_s == 15.0


def test_unknown_timestamp_source_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRANSCRIPT_TIMESTAMP_SOURCE", "server")
    with pytest.raises(ValueError):
        load_settings()
