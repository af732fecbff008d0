"""Google Gemini API wrapper with retry, caching and monitoring.

``invoke`` is the only way the rest of the app talks to the completion
model. It never raises: after the retry budget is spent the failure comes
back as ``success=False`` with the diagnostic in ``raw_text``.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx
from google import genai
from google.genai import types

from config import settings
from models.schemas.model_io import ModelRequest, ModelResponse, ResponseType
from services import quality_validator
from services.monitoring import monitor
from services.prompt_builder import SYSTEM_PROMPTS
from services.response_cache import ResponseCache, fingerprint

logger = logging.getLogger(__name__)

_client: genai.Client | None = None
_cache = ResponseCache(ttl_seconds=settings.cache_ttl_seconds, max_entries=settings.cache_max_entries)

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
RETRYABLE_MARKERS = (
    "resource exhausted", "quota", "rate limit", "unavailable",
    "overloaded", "timed out", "timeout", "connection reset",
)


@dataclass(frozen=True)
class GenerationProfile:
    temperature: float
    max_output_tokens: int
    top_p: float = 0.9


PROFILES: dict[ResponseType, GenerationProfile] = {
    ResponseType.GENERAL: GenerationProfile(temperature=0.7, max_output_tokens=1024),
    ResponseType.INTERVIEW: GenerationProfile(temperature=0.8, max_output_tokens=512),
    ResponseType.FEEDBACK: GenerationProfile(temperature=0.6, max_output_tokens=3000),
    ResponseType.JSON: GenerationProfile(temperature=0.3, max_output_tokens=4096),
}


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def is_retryable(exc: Exception) -> bool:
    """Transient failures: timeouts, transport errors, 429 and 5xx."""
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, ConnectionError, httpx.TransportError)):
        return True
    status = getattr(exc, "status_code", None) or getattr(exc, "code", None)
    if isinstance(status, int):
        return status in RETRYABLE_STATUS_CODES
    message = str(exc).lower()
    return any(marker in message for marker in RETRYABLE_MARKERS)


def _generate(client: genai.Client, request: ModelRequest) -> str:
    """Blocking SDK call. Runs in a worker thread."""
    profile = PROFILES[request.response_type]
    response = client.models.generate_content(
        model=request.model_id,
        contents=request.prompt,
        config=types.GenerateContentConfig(
            system_instruction=SYSTEM_PROMPTS[request.response_type],
            temperature=profile.temperature,
            max_output_tokens=profile.max_output_tokens,
            top_p=profile.top_p,
            response_mime_type="application/json" if request.response_type == ResponseType.JSON else None,
        ),
    )
    text = response.text
    if not text:
        raise ValueError("Gemini returned an empty response")
    return text


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def _failure(request: ModelRequest, message: str, started: float, retry_count: int) -> ModelResponse:
    response = ModelResponse(
        raw_text=message,
        success=False,
        model_id=request.model_id,
        processing_time_ms=_elapsed_ms(started),
        quality_score=0.0,
        retry_count=retry_count,
    )
    monitor.record_request(request.model_id, response.processing_time_ms, False, 0.0)
    return response


async def invoke(request: ModelRequest) -> ModelResponse:
    """Send a prompt to Gemini and return the raw reply with timing metadata."""
    started = time.perf_counter()
    key = fingerprint(request)

    if settings.cache_enabled:
        cached = _cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s request on %s", request.response_type.value, request.model_id)
            return cached.model_copy(update={"cached": True, "retry_count": 0})

    client = get_client()
    if client is None:
        return _failure(request, "Gemini API key not configured", started, 0)

    retries = 0
    last_error: Exception | None = None
    for attempt in range(settings.model_max_retries + 1):
        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(_generate, client, request),
                timeout=settings.model_timeout_seconds,
            )
        except Exception as e:
            last_error = e
            if attempt < settings.model_max_retries and is_retryable(e):
                delay = min(settings.model_retry_base_delay * (2 ** attempt), settings.model_retry_max_delay)
                logger.warning(
                    "Gemini call failed (%s), retrying in %.1fs (attempt %d/%d)",
                    str(e)[:100], delay, attempt + 1, settings.model_max_retries,
                )
                retries += 1
                await asyncio.sleep(delay)
                continue
            break

        quality = quality_validator.validate(text, request.response_type)
        response = ModelResponse(
            raw_text=text,
            success=True,
            model_id=request.model_id,
            processing_time_ms=_elapsed_ms(started),
            quality_score=quality.score,
            retry_count=retries,
        )
        if quality.issues:
            logger.info("Quality issues in %s reply: %s", request.response_type.value, "; ".join(quality.issues))
        monitor.record_request(request.model_id, response.processing_time_ms, True, quality.score)
        if settings.cache_enabled:
            _cache.put(key, response)
        return response

    logger.error("Gemini API error after %d retries: %s", retries, last_error)
    return _failure(
        request,
        f"Service unavailable after {retries} retries: {type(last_error).__name__}: {last_error}",
        started,
        retries,
    )


def clear_cache() -> None:
    _cache.clear()


def cache_size() -> int:
    return len(_cache)
