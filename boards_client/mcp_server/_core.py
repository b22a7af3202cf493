"""Core helpers: client caching, _call dispatcher, response contract, ID validation."""

from __future__ import annotations

import re

from boards_client import (
    BatchValidationError,
    BoardsClient,
    BoardsError,
    RequestFailedError,
    SetupError,
)
from boards_client.config import CONTRACT_SCHEMA_VERSION, MCP_RESPONSE_MODE
from boards_client.models import _Model

_client: BoardsClient | None = None


def _get_client() -> BoardsClient:
    """Return a cached BoardsClient, creating one on first use."""
    global _client
    if _client is None:
        _client = BoardsClient()
    return _client


def _contract_error(message: str, error_type: str = "error", **extra) -> dict:
    """Return a stable MCP error envelope with legacy compatibility fields."""
    detail = {"type": error_type, "message": message}
    detail.update(extra)
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,  # legacy
        "error": message,  # legacy
        "error_detail": detail,
    }


def _ensure_contract_dict(payload: dict) -> dict:
    """Add stable contract metadata to dict responses."""
    out = dict(payload)
    out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
    if out.get("ok") is False:
        error_type = str(out.get("type", "error"))
        error_message = out.get("error", "Unknown error")
        if not isinstance(error_message, str):
            error_message = str(error_message)
            out["error"] = error_message
        out.setdefault(
            "error_detail",
            {
                "type": error_type,
                "message": error_message,
            },
        )
        return out
    out.setdefault("ok", True)
    return out


def _finalize_tool_result(result):
    """Finalize tool response based on configured MCP response mode.

    Modes:
        - legacy (default): lists pass through; dicts gain ok/schema_version.
        - envelope: always return {"ok", "schema_version", "data"} for success.
    """
    if isinstance(result, dict):
        normalized = _ensure_contract_dict(result)
        if normalized.get("ok") is False:
            return normalized
        if MCP_RESPONSE_MODE == "envelope":
            data = dict(normalized)
            data.pop("ok", None)
            data.pop("schema_version", None)
            return {
                "ok": True,
                "schema_version": CONTRACT_SCHEMA_VERSION,
                "data": data,
            }
        return normalized
    if MCP_RESPONSE_MODE == "envelope":
        return {
            "ok": True,
            "schema_version": CONTRACT_SCHEMA_VERSION,
            "data": result,
        }
    return result


def _plain(value):
    """Models (and lists of them) to plain JSON values."""
    if isinstance(value, _Model):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


_ALLOWED_METHODS = {
    "get_board",
    "get_boards_for_team",
    "get_blocks_for_board",
    "get_all_blocks_for_board",
    "get_cards",
    "get_members_for_board",
    "create_boards_and_blocks",
    "patch_boards_and_blocks",
    "delete_boards_and_blocks",
}

_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def _validate_id(value: str, field: str = "board_id") -> str:
    """Validate an opaque entity ID. Raises BoardsError if malformed."""
    if not isinstance(value, str) or not _ID_RE.match(value):
        raise BoardsError(f"[ERROR] {field} must be a non-empty alphanumeric ID, got: {value!r}")
    return value


def _validate_id_list(values: list[str], field: str = "board_ids") -> list[str]:
    """Validate a list of ID strings."""
    if not isinstance(values, list):
        raise BoardsError(f"[ERROR] {field} must be a list of IDs")
    return [_validate_id(v, field) for v in values]


def _call(method_name: str, **kwargs):
    """Call a BoardsClient method, converting exceptions to error dicts."""
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return _plain(getattr(client, method_name)(**kwargs))
    except SetupError as e:
        return _contract_error(str(e), "setup")
    except BatchValidationError as e:
        return _contract_error(str(e), "validation")
    except RequestFailedError as e:
        message = e.error_message() or f"HTTP {e.status_code}"
        return _contract_error(message, "http", status=e.status_code)
    except BoardsError as e:
        return _contract_error(str(e), "error")
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
