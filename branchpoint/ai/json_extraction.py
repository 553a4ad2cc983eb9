"""Extract a JSON object embedded in model output"""
import json
import logging
import re
from typing import Any, Dict, Iterator, Optional

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.DOTALL)

# Tolerates raw control characters (newlines, tabs) inside strings
_LENIENT_DECODER = json.JSONDecoder(strict=False)


def strip_code_fences(text: str) -> str:
    """Return the body of the first Markdown code block, or the text unchanged."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def iter_json_objects(text: str) -> Iterator[Dict[str, Any]]:
    """
    Yield every JSON object that can be decoded starting at a ``{``, in order.

    Each ``{`` is tried independently, so an unclosed brace in prose does
    not hide an object that follows it. Once an object decodes, scanning
    resumes after its closing brace; nested objects are not yielded twice.
    """
    index = text.find("{")
    while index != -1:
        try:
            parsed, end = _LENIENT_DECODER.raw_decode(text, index)
        except json.JSONDecodeError:
            index = text.find("{", index + 1)
            continue
        yield parsed
        index = text.find("{", end)


def _loads_object(candidate: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(candidate)
    except (json.JSONDecodeError, ValueError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of free text.

    1. Strict parse of the whole response after removing code fences.
    2. Try a lenient decode at every ``{`` and return the first object.
    3. None when nothing parses.

    Never raises.
    """
    if not text or not text.strip():
        return None

    body = strip_code_fences(text)
    parsed = _loads_object(body)
    if parsed is not None:
        return parsed

    for source in (body, text) if body != text.strip() else (text,):
        parsed = next(iter_json_objects(source), None)
        if parsed is not None:
            return parsed

    logger.debug("No JSON object found in model output")
    return None
