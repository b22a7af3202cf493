"""
boards-client exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""

import json


class BoardsError(Exception):
    """Exit code 1: validation, not-found, network, parse errors."""

    exit_code = 1


class SetupError(BoardsError):
    """Exit code 2: no server URL configured."""

    exit_code = 2


# ---------------------------------------------------------------------------
# Batch validation
# ---------------------------------------------------------------------------


class BatchValidationError(BoardsError):
    """A boards-and-blocks payload broke a structural invariant.

    Raised before any network activity; never worth retrying.
    """

    default_message = "invalid boards and blocks batch"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class NoBoardsError(BatchValidationError):
    default_message = "at least one board is required"


class NoBlocksError(BatchValidationError):
    default_message = "at least one block is required"


class OrphanBlockError(BatchValidationError):
    """A block in a create batch points at a board outside the batch."""

    def __init__(self, block_id):
        self.block_id = block_id
        super().__init__(f"block {block_id} doesn't belong to any board")


class BoardListMismatchError(BatchValidationError):
    default_message = "board ids and patches need to match"


class BlockListMismatchError(BatchValidationError):
    default_message = "block ids and patches need to match"


class MalformedBatchError(BatchValidationError):
    default_message = "batch ids must be lists of strings"


class InvalidBlockTypeError(BoardsError):
    def __init__(self, block_type):
        self.type = block_type
        super().__init__(f"{block_type} is an invalid block type.")


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class TransportError(BoardsError):
    """Base for failures while executing or decoding a remote call."""


class ConnectionFailedError(TransportError):
    """No response was obtained (DNS, refused connection, timeout, TLS)."""

    def __init__(self, cause, url=None):
        self.cause = cause
        self.url = url
        target = f" to {url}" if url else ""
        super().__init__(f"[ERROR] Connection{target} failed: {cause}")


class RequestFailedError(TransportError):
    """The server answered with a status >= 300 (other than 304).

    ``body`` holds the raw response bytes, which may be empty or non-JSON.
    """

    def __init__(self, status_code, body=b"", headers=None, reason=""):
        self.status_code = status_code
        self.body = body or b""
        self.headers = headers or {}
        self.reason = reason
        super().__init__(f"payload: {self.body.decode('utf-8', errors='replace')}")

    @property
    def code(self):
        return self.status_code

    def error_message(self):
        """Best-effort extraction of the server's ``error`` field, else None."""
        try:
            data = json.loads(self.body.decode("utf-8"))
        except (ValueError, UnicodeDecodeError):
            return None
        if isinstance(data, dict):
            message = data.get("error") or data.get("message")
            if isinstance(message, str):
                return message
        return None


class DecodeError(TransportError):
    """A successful response body did not match the expected shape."""

    def __init__(self, cause, context="response"):
        self.cause = cause
        self.context = context
        super().__init__(f"[ERROR] Could not decode {context}: {cause}")
