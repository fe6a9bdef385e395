import json
from typing import Any

from .config import settings

TITLE_KEYS = ("title", "text", "suggestion")


def _first_title_field(obj: dict) -> Any:
    for key in TITLE_KEYS:
        value = obj.get(key)
        if value:
            return value
    return None


def _title_from_item(item: Any) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        value = _first_title_field(item)
        if value is not None:
            return str(value).strip()
        for value in item.values():
            if isinstance(value, str):
                return value.strip()
    return json.dumps(item, ensure_ascii=False).strip()


def _titles_from_string(src: str) -> list[str]:
    return [s.strip() for s in src.split(",") if s.strip()]


def _titles_from_array(src: list) -> list[str]:
    return [_title_from_item(item) for item in src]


def _titles_from_object(src: dict) -> list[str]:
    value = _first_title_field(src)
    if isinstance(value, str):
        return [value.strip()]
    return []


def decode_titles(payload: Any) -> list[str]:
    """
    Pull raw title strings out of a parsed model payload.

    Accepted shapes under `titles` (or `suggestions`):
      - one comma-separated string (what the prompt asks for)
      - an array of strings or title-like objects
      - a single title-like object
    Anything else yields no titles.
    """
    if not isinstance(payload, dict):
        return []
    src = payload.get("titles")
    if src is None:
        src = payload.get("suggestions")

    if isinstance(src, str):
        return _titles_from_string(src)
    if isinstance(src, list):
        return _titles_from_array(src)
    if isinstance(src, dict):
        return _titles_from_object(src)
    return []


def clean_titles(titles: list[str], max_length: int | None = None) -> list[str]:
    """Trim, drop blanks, cap length and de-dupe while keeping first-seen order."""
    limit = max_length or settings.max_title_length
    cleaned = []
    for t in titles:
        t = str(t).strip()
        if not t:
            continue
        if len(t) > limit:
            t = t[:limit].rstrip()
        cleaned.append(t)
    return list(dict.fromkeys(cleaned))


def normalize_titles(payload: Any, max_length: int | None = None) -> list[str]:
    return clean_titles(decode_titles(payload), max_length=max_length)
