import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    max_upload_size_mb: int = 10
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Model ids per purpose
    interview_model: str = "gemini-2.5-flash"
    resume_analysis_model: str = "gemini-2.5-flash"
    feedback_model: str = "gemini-2.5-flash"
    fast_model: str = "gemini-2.5-flash-lite"
    tts_model: str = "gemini-2.5-flash-preview-tts"

    # Invoker retry/timeout budget
    model_max_retries: int = 3
    model_retry_base_delay: float = 1.0  # seconds, doubled per attempt
    model_retry_max_delay: float = 10.0
    model_timeout_seconds: float = 30.0

    # Response cache
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300
    cache_max_entries: int = 1000

    # Interview sessions
    session_timeout_minutes: int = 60

    # Speech synthesis
    tts_default_voice: str = "Kore"
    max_tts_chars: int = 3000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
