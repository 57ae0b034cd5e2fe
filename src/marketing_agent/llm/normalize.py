"""Response normalization.

Turns raw model text into a validated MarketingAnalysis. Cleaning is an ordered
list of small text transforms, followed by exactly one JSON parse and a
structural check against the analysis schema. An optional bracket-balancing
repair pass (JSON_REPAIR_ENABLED) gets one more parse for truncated replies.
"""

import json
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..config import get_settings
from ..errors import ParseFailed, SchemaViolation
from ..log import get_logger
from .schema import REQUIRED_SECTIONS, MarketingAnalysis

settings = get_settings()
logger = get_logger("normalize")

_FENCE_RE = re.compile(r"```(?:json)?\n?", re.IGNORECASE)
_DANGLING_KEY_RE = re.compile(r',?\s*"[^"\\]*"\s*:\s*$')
_TRAILING_COMMA_RE = re.compile(r",\s*$")


def strip_fences(text: str) -> str:
    """Removes every ```json / ``` marker, wherever it appears."""
    return _FENCE_RE.sub("", text)


def trim(text: str) -> str:
    return text.strip()


def isolate_object(text: str) -> str:
    """
    Drops prose around the outermost {...} span.
    Text without braces, or a top-level array, is returned unchanged.
    """
    if text.startswith("["):
        return text
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start:end + 1]


CLEANING_STEPS: Sequence[Callable[[str], str]] = (strip_fences, trim, isolate_object)


def clean(raw: str) -> str:
    text = raw
    for step in CLEANING_STEPS:
        text = step(text)
    return text


def parse_json(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseFailed(detail=f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseFailed(detail=f"expected a JSON object, got {type(data).__name__}")
    return data


def balance_brackets(text: str) -> str:
    """
    Closes a reply that was cut off mid-object: terminates an open string,
    drops a dangling key or trailing comma, and appends the missing closers.
    Starts at the first '{'; text without one is returned unchanged.
    """
    start = text.find("{")
    if start == -1:
        return text
    text = text[start:]

    closers: List[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            closers.append("}")
        elif ch == "[":
            closers.append("]")
        elif ch in "}]" and closers and closers[-1] == ch:
            closers.pop()

    repaired = text
    if in_string:
        if escaped:
            repaired = repaired[:-1]
        repaired += '"'
    repaired = repaired.rstrip()
    repaired = _DANGLING_KEY_RE.sub("", repaired)
    repaired = _TRAILING_COMMA_RE.sub("", repaired)
    return repaired + "".join(reversed(closers))


def check_required_sections(data: Dict[str, Any]) -> None:
    missing = [key for key in REQUIRED_SECTIONS if key not in data]
    if missing:
        raise SchemaViolation(
            missing,
            message=f"AI response is missing required sections: {', '.join(missing)}",
        )


def validate_structure(data: Dict[str, Any]) -> MarketingAnalysis:
    check_required_sections(data)
    try:
        return MarketingAnalysis.model_validate(data)
    except ValidationError as e:
        paths = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise SchemaViolation(paths) from e


def _log_raw(raw: str, reason: Optional[str]) -> None:
    limit = settings.RAW_OUTPUT_LOG_CHARS
    suffix = "..." if len(raw) > limit else ""
    logger.error(f"Failed to parse model output ({reason}): {raw[:limit]!r}{suffix}")


def normalize(raw: str, repair: Optional[bool] = None) -> MarketingAnalysis:
    """
    Raw model text -> MarketingAnalysis.
    Raises ParseFailed (or its SchemaViolation subclass); never returns a partial object.
    """
    repair = settings.JSON_REPAIR_ENABLED if repair is None else repair
    try:
        data = parse_json(clean(raw))
    except ParseFailed as e:
        if not repair:
            _log_raw(raw, e.detail)
            raise
        logger.info("First parse failed, trying bracket-balancing repair")
        try:
            data = parse_json(balance_brackets(trim(strip_fences(raw))))
        except ParseFailed as repair_error:
            _log_raw(raw, repair_error.detail)
            raise

    try:
        return validate_structure(data)
    except SchemaViolation as e:
        _log_raw(raw, e.detail)
        raise
