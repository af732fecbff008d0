"""Structured response extraction for model replies.

Models are told to answer with one JSON object but often wrap it in a
markdown fence or surround it with prose. Candidate selection, in order:

1. the body of the first ```json fenced block,
2. otherwise the span from the first '{' to the last '}' (greedy, no
   brace balancing),
3. otherwise the whole trimmed text.

The candidate is parsed with ``json.loads``. Anything that does not yield a
JSON object goes to the heuristic fallback in ``services.fallback``, which is
kept separate so this strict path stays easy to reason about.
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from services import fallback

logger = logging.getLogger(__name__)

JSON_FENCE = "```json"
FENCE = "```"

ResultT = TypeVar("ResultT", bound=BaseModel)


def json_candidate(raw_text: str) -> str:
    """Pick the substring of a model reply that should hold the JSON object."""
    text = raw_text.strip()

    if JSON_FENCE in text:
        start = text.index(JSON_FENCE) + len(JSON_FENCE)
        end = text.find(FENCE, start)
        if end != -1:
            return text[start:end].strip()
        # Unclosed fence: the whole text is the candidate
        return text

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first : last + 1]

    return text


def extract_json(raw_text: str | None) -> dict[str, Any] | None:
    """Strictly parse the JSON object in a reply, or None if there isn't one."""
    text = (raw_text or "").strip()
    if not text:
        return None

    candidate = json_candidate(text)
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.debug("Model reply is not valid JSON: %s", e)
        return None

    if not isinstance(data, dict):
        logger.debug("Model reply parsed to %s, expected an object", type(data).__name__)
        return None
    return data


def _validate_lenient(result_cls: type[ResultT], data: dict[str, Any]) -> ResultT:
    """Validate model JSON; fields with the wrong shape fall back to their defaults."""
    try:
        return result_cls.model_validate(data)
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        dropped: set[str] = set()
        for name, field in result_cls.model_fields.items():
            if name in bad or field.alias in bad:
                dropped.update({name, field.alias or name})
        logger.info("Ignoring malformed fields in model JSON: %s", sorted(dropped))
        return result_cls.model_validate({k: v for k, v in data.items() if k not in dropped})


def parse_structured(
    raw_text: str | None,
    result_cls: type[ResultT],
    context: dict[str, Any] | None = None,
) -> ResultT:
    """Turn a model reply into a fully populated result of ``result_cls``.

    Never raises. ``structured`` on the result tells whether the model's JSON
    was used (True) or the heuristic fallback (False). ``context`` is only
    consulted by the fallback.
    """
    data = extract_json(raw_text)
    if data is None:
        logger.warning("No JSON object in model reply, using %s fallback", result_cls.__name__)
        return fallback.synthesize(result_cls, raw_text or "", context)

    result = _validate_lenient(result_cls, data)
    return result.model_copy(update={"structured": True})
