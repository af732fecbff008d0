"""Text-to-speech for the interviewer's voice via the Gemini TTS model."""

import asyncio
import io
import logging
import wave

from google.genai import types

from config import settings
from services import gemini_client

logger = logging.getLogger(__name__)

# Gemini TTS returns 16-bit little-endian mono PCM at 24 kHz
SAMPLE_RATE = 24000
SAMPLE_WIDTH = 2
CHANNELS = 1

VOICES: dict[str, dict[str, str]] = {
    "Kore": {"gender": "female", "style": "Firm"},
    "Aoede": {"gender": "female", "style": "Breezy"},
    "Leda": {"gender": "female", "style": "Youthful"},
    "Puck": {"gender": "male", "style": "Upbeat"},
    "Charon": {"gender": "male", "style": "Informative"},
    "Fenrir": {"gender": "male", "style": "Excitable"},
}


class SpeechSynthesisError(Exception):
    """Speech could not be produced."""


def list_voices() -> list[dict[str, str]]:
    return [{"id": name, **info} for name, info in VOICES.items()]


def pcm_to_wav(pcm: bytes) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav:
        wav.setnchannels(CHANNELS)
        wav.setsampwidth(SAMPLE_WIDTH)
        wav.setframerate(SAMPLE_RATE)
        wav.writeframes(pcm)
    return buffer.getvalue()


def _synthesize_pcm(client, text: str, voice: str) -> bytes:
    """Blocking SDK call. Runs in a worker thread."""
    response = client.models.generate_content(
        model=settings.tts_model,
        contents=text,
        config=types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                )
            ),
        ),
    )
    try:
        data = response.candidates[0].content.parts[0].inline_data.data
    except (AttributeError, IndexError, TypeError) as e:
        raise SpeechSynthesisError("TTS response contained no audio") from e
    if not data:
        raise SpeechSynthesisError("TTS response contained no audio")
    return data


async def synthesize(text: str, voice: str | None = None, audio_format: str = "wav") -> bytes:
    """Speak ``text`` with a prebuilt voice. Returns WAV (default) or raw PCM bytes."""
    text = text.strip()
    if not text:
        raise ValueError("Text is required")
    if len(text) > settings.max_tts_chars:
        raise ValueError(f"Text too long (max {settings.max_tts_chars} chars)")
    voice = voice or settings.tts_default_voice
    if voice not in VOICES:
        raise ValueError(f"Unknown voice: {voice}")

    client = gemini_client.get_client()
    if client is None:
        raise SpeechSynthesisError("Gemini API key not configured")

    try:
        pcm = await asyncio.wait_for(
            asyncio.to_thread(_synthesize_pcm, client, text, voice),
            timeout=settings.model_timeout_seconds,
        )
    except SpeechSynthesisError:
        raise
    except Exception as e:
        logger.error("Speech synthesis failed: %s", e)
        raise SpeechSynthesisError(f"Speech synthesis failed: {e}") from e

    logger.info("Synthesized %d chars with voice %s (%d bytes PCM)", len(text), voice, len(pcm))
    return pcm_to_wav(pcm) if audio_format == "wav" else pcm
