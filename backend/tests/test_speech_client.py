import asyncio
import io
import wave
from types import SimpleNamespace

import pytest

from config import settings
from services import gemini_client, speech_client
from services.speech_client import SpeechSynthesisError, synthesize

PCM = b"\x00\x01" * 2400


def _tts_response(data: bytes | None):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModels:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def fake_tts(monkeypatch):
    models = FakeModels(response=_tts_response(PCM))
    monkeypatch.setattr(gemini_client, "get_client", lambda: SimpleNamespace(models=models))
    return models


def test_list_voices():
    voices = speech_client.list_voices()
    assert {v["id"] for v in voices} == set(speech_client.VOICES)
    assert settings.tts_default_voice in speech_client.VOICES


def test_wav_output(fake_tts):
    audio = asyncio.run(synthesize("Welcome to your interview."))
    with wave.open(io.BytesIO(audio)) as wav:
        assert wav.getframerate() == 24000
        assert wav.getnchannels() == 1
        assert wav.getsampwidth() == 2
        assert wav.readframes(wav.getnframes()) == PCM

    [call] = fake_tts.calls
    assert call["model"] == settings.tts_model
    assert call["config"].speech_config.voice_config.prebuilt_voice_config.voice_name == "Kore"


def test_pcm_output_and_voice(fake_tts):
    audio = asyncio.run(synthesize("Hello", voice="Puck", audio_format="pcm"))
    assert audio == PCM
    assert fake_tts.calls[0]["config"].speech_config.voice_config.prebuilt_voice_config.voice_name == "Puck"


@pytest.mark.parametrize("text, voice", [("   ", None), ("x" * 3001, None), ("Hi", "Joanna")])
def test_invalid_input(fake_tts, text, voice):
    with pytest.raises(ValueError):
        asyncio.run(synthesize(text, voice))
    assert fake_tts.calls == []


def test_empty_audio_is_an_error(monkeypatch):
    models = FakeModels(response=_tts_response(b""))
    monkeypatch.setattr(gemini_client, "get_client", lambda: SimpleNamespace(models=models))
    with pytest.raises(SpeechSynthesisError):
        asyncio.run(synthesize("Hello"))


def test_sdk_error_is_wrapped(monkeypatch):
    models = FakeModels(error=RuntimeError("boom"))
    monkeypatch.setattr(gemini_client, "get_client", lambda: SimpleNamespace(models=models))
    with pytest.raises(SpeechSynthesisError, match="boom"):
        asyncio.run(synthesize("Hello"))


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "")
    with pytest.raises(SpeechSynthesisError):
        asyncio.run(synthesize("Hello"))
