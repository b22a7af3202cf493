"""Security: injection detection, output tagging, input validation."""

from __future__ import annotations

import re

from boards_client import BoardsError

# Board and block titles/descriptions are short free text; two checks cover them.
_INJECTION_CHECKS = {
    "role label": re.compile(r"^\s*(system|assistant|user)\s*:", re.I | re.M),
    "override directive": re.compile(
        r"\b(ignore|disregard)\s+(all\s+)?(previous|prior|above)\s+(instructions|rules)", re.I
    ),
}


def _check_injection(text: str) -> list[str]:
    """Names of the injection checks *text* trips; texts under 10 chars are skipped."""
    if len(text) < 10:
        return []
    return [name for name, pattern in _INJECTION_CHECKS.items() if pattern.search(text)]


def _tag_user_text(text: str | None) -> str | None:
    """Wrap user-authored text in [USER_DATA] boundary markers."""
    if text is None:
        return None
    return f"[USER_DATA]{text}[/USER_DATA]"


_USER_TEXT_FIELDS = {"title", "description"}


def _sanitize_entity(entity: dict) -> dict:
    """Tag user-editable board/block/card text and flag suspected injections."""
    if not isinstance(entity, dict):
        return entity
    out = dict(entity)
    warnings: list[str] = []
    for field in _USER_TEXT_FIELDS:
        if field in out and isinstance(out[field], str):
            for desc in _check_injection(out[field]):
                warnings.append(f"{field}: {desc}")
            out[field] = _tag_user_text(out[field])
    if warnings:
        out["_safety_warnings"] = warnings
    return out


def _sanitize_batch(data: dict) -> dict:
    """Sanitize every board and block of a boards-and-blocks result."""
    if not isinstance(data, dict):
        return data
    out = dict(data)
    for key in ("boards", "blocks"):
        if isinstance(out.get(key), list):
            out[key] = [_sanitize_entity(item) for item in out[key]]
    return out


_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_INPUT_LIMITS = {
    "title": 500,
    "description": 50_000,
}


def _validate_input(text: str, field: str) -> str:
    """Strip control characters and enforce length limits.

    Raises BoardsError if text is not a string or exceeds the field limit.
    """
    if not isinstance(text, str):
        raise BoardsError(f"[ERROR] {field} must be a string")
    cleaned = _CONTROL_RE.sub("", text)
    limit = _INPUT_LIMITS.get(field, 50_000)
    if len(cleaned) > limit:
        raise BoardsError(f"[ERROR] {field} exceeds maximum length of {limit} characters")
    return cleaned


def _clean_payload(item: dict) -> dict:
    """Apply _validate_input to the text fields of an incoming board/block/patch dict."""
    if not isinstance(item, dict):
        raise BoardsError("[ERROR] batch items must be JSON objects")
    out = dict(item)
    for field in _USER_TEXT_FIELDS:
        if isinstance(out.get(field), str):
            out[field] = _validate_input(out[field], field)
    return out
