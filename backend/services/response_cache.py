"""Read-through cache of successful model responses keyed by request fingerprint.

Purely a latency optimisation: a miss, an expiry or a disabled cache must
never change what callers get back.
"""

import hashlib
import json
import time

from models.schemas.model_io import ModelRequest, ModelResponse

MIN_CACHEABLE_QUALITY = 0.7


def fingerprint(request: ModelRequest) -> str:
    """Stable key over everything that shapes the model's answer."""
    payload = json.dumps(
        {
            "model": request.model_id,
            "type": request.response_type.value,
            "prompt": request.prompt,
            "context": request.context or {},
        },
        sort_keys=True,
        default=str,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ResponseCache:
    def __init__(self, ttl_seconds: float = 300, max_entries: int = 1000) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: dict[str, tuple[float, ModelResponse]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> ModelResponse | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, response = entry
        if time.monotonic() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return response

    def put(self, key: str, response: ModelResponse) -> bool:
        """Store a response if it is worth reusing. Returns whether it was stored."""
        if not response.success or response.quality_score < MIN_CACHEABLE_QUALITY:
            return False
        self._entries[key] = (time.monotonic(), response)
        if len(self._entries) > self.max_entries:
            # Drop the oldest fifth in one go
            oldest = sorted(self._entries.items(), key=lambda kv: kv[1][0])
            for k, _ in oldest[: max(1, self.max_entries // 5)]:
                del self._entries[k]
        return True

    def clear(self) -> None:
        self._entries.clear()
