"""
Turns whatever the generation SDK hands back into text, and that text into JSON.

The response object changes shape between SDK versions and transports, so text
extraction walks an ordered list of strategies and keeps the first hit.
"""
import inspect
import json
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from loguru import logger

_FENCE_OPEN_JSON = re.compile(r"^```json\n?", re.IGNORECASE)
_FENCE_OPEN = re.compile(r"^```\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$", re.IGNORECASE)


def _field(obj: Any, name: str) -> Any:
    """Reads `name` from a mapping key or an attribute, whichever the object has."""
    if obj is None or isinstance(obj, str):
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _join_parts(parts: Any) -> Optional[str]:
    if not isinstance(parts, (list, tuple)):
        return None
    texts = [_field(p, "text") for p in parts]
    joined = "\n".join(t for t in texts if isinstance(t, str) and t)
    return joined or None


async def _from_text_accessor(obj: Any) -> Optional[str]:
    accessor = _field(obj, "text")
    if callable(accessor):
        accessor = accessor()
        if inspect.isawaitable(accessor):
            accessor = await accessor
    return accessor if isinstance(accessor, str) else None


async def _text_accessor(resp: Any) -> Optional[str]:
    return await _from_text_accessor(resp)


async def _nested_text_accessor(resp: Any) -> Optional[str]:
    nested = _field(resp, "response")
    if nested is None:
        return None
    return await _from_text_accessor(nested)


def _output_text(resp: Any) -> Optional[str]:
    value = _field(resp, "outputText")
    return value if isinstance(value, str) else None


def _candidates(resp: Any) -> Optional[str]:
    candidates = _field(_field(resp, "response"), "candidates") or _field(resp, "candidates")
    if not isinstance(candidates, (list, tuple)) or not candidates:
        return None
    first = candidates[0]
    content = _field(first, "content")
    joined = _join_parts(_field(content, "parts"))
    if joined:
        return joined
    text = _field(content, "text") or _field(first, "text")
    if isinstance(text, str) and text.strip():
        return text
    return None


def _content_parts(resp: Any) -> Optional[str]:
    return _join_parts(_field(_field(resp, "content"), "parts"))


def _plain_string(resp: Any) -> Optional[str]:
    return resp if isinstance(resp, str) else None


def _serialized(resp: Any) -> Optional[str]:
    if hasattr(resp, "model_dump"):
        return json.dumps(resp.model_dump(mode="json", exclude_none=True))
    return json.dumps(resp)


# Tried in order; each returns None (or an awaitable of None) when its shape is absent.
EXTRACTION_STRATEGIES: list[Callable[[Any], Any]] = [
    _text_accessor,
    _nested_text_accessor,
    _output_text,
    _candidates,
    _content_parts,
    _plain_string,
    _serialized,
]


async def extract_text(resp: Any) -> str:
    """Return the text payload of a model response. Never raises."""
    try:
        for strategy in EXTRACTION_STRATEGIES:
            text = strategy(resp)
            if inspect.isawaitable(text):
                text = await text
            if text is not None:
                return text
        return str(resp)
    except Exception as e:
        logger.warning(f"Text extraction fell back to str(): {e}")
        return str(resp)


def strip_code_fences(text: str) -> str:
    text = _FENCE_OPEN_JSON.sub("", text, count=1)
    text = _FENCE_OPEN.sub("", text, count=1)
    return _FENCE_CLOSE.sub("", text, count=1)


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be rendered back into a response.
    raise ValueError(f"non-standard JSON constant {name}")


def _try_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError):
        return None


def parse_json_payload(raw_text: str) -> Any:
    """Decode the fence-stripped text, falling back to the raw text. None if neither is JSON."""
    parsed = _try_json(strip_code_fences(raw_text))
    if parsed is None:
        parsed = _try_json(raw_text)
    return parsed
