"""
BoardsClient: public Python API for the boards service.

Batch boards-and-blocks calls are validated locally before anything is
sent. Every other operation is generated from the table in
``boards_client.endpoints``: one method per entry, same name, keyword
(or positional, in table order) arguments.
"""

from __future__ import annotations

import enum
from typing import Any

from boards_client import config
from boards_client.endpoints import (
    BOARDS_AND_BLOCKS_ROUTE,
    ENDPOINTS,
    ENDPOINTS_BY_NAME,
    JSON,
    NOTHING,
    OK,
    RAW,
    Many,
)
from boards_client.exceptions import BoardsError, SetupError
from boards_client.models import (
    BoardsAndBlocks,
    DeleteBoardsAndBlocks,
    PatchBoardsAndBlocks,
    _Model,
)
from boards_client.transport import Response, Transport, decode_json


def _to_json(value):
    """Convert models (and lists of models) into JSON-ready values."""
    if isinstance(value, _Model):
        return value.to_dict()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return value


def _decode(result, kind, context):
    """Turn a RawResult into the value an operation returns. Always closes it."""
    if kind == OK:
        result.close()
        return True
    if kind == NOTHING:
        result.close()
        return None
    if kind == RAW:
        with result:
            return result.read()

    data = decode_json(result, context=context)
    if kind == JSON or data is None:
        return data
    if isinstance(kind, Many):
        return kind.model.list_from_json(data)
    return kind.from_dict(data)


def _bind_args(endpoint, args, kwargs):
    """Map positional args onto the endpoint's parameter order."""
    names = endpoint.params
    if len(args) > len(names):
        raise TypeError(
            f"{endpoint.name}() takes at most {len(names)} positional arguments "
            f"({len(args)} given)"
        )
    bound = dict(zip(names, args))
    for key, value in kwargs.items():
        if key in bound:
            raise TypeError(f"{endpoint.name}() got multiple values for argument '{key}'")
        bound[key] = value
    return bound


class BoardsClient:
    """Client for the boards REST API (``<url>/api/v2``).

    Args:
        url: Server root. Defaults to BOARDS_URL from .env.
        token: Bearer token. Defaults to BOARDS_TOKEN from .env.
        transport: Pre-built Transport; overrides url/token/headers/timeout.
    """

    def __init__(self, url=None, token=None, *, transport=None, headers=None, timeout=None):
        if transport is None:
            url = url if url is not None else config.BOARDS_URL
            if not url:
                raise SetupError(
                    "[SETUP_NEEDED] No server URL configured.\n"
                    "  Set BOARDS_URL in .env or pass url= to BoardsClient."
                )
            token = token if token is not None else config.BOARDS_TOKEN
            transport = Transport(url, token, headers=headers, timeout=timeout)
        self.transport = transport

    def __repr__(self):
        return f"BoardsClient({self.transport!r})"

    def with_token(self, token) -> BoardsClient:
        """Return a new client for the same server authenticated with *token*."""
        t = self.transport
        extra = {k: v for k, v in t.headers.items() if k not in config.DEFAULT_HEADERS}
        return BoardsClient(t.url, token, headers=extra, timeout=t.timeout)

    def _send(self, method, path, body, decode, context) -> tuple[Any, Response]:
        payload = _to_json(body) if body is not None else None
        result = self.transport.execute(method, path, payload)
        response = result.response
        return _decode(result, decode, context), response

    def invoke(self, name, **params) -> tuple[Any, Response]:
        """Run the table operation *name*; returns (value, Response)."""
        endpoint = ENDPOINTS_BY_NAME.get(name)
        if endpoint is None:
            raise BoardsError(f"[ERROR] Unknown operation: {name}")
        body = params.pop(endpoint.body, None) if endpoint.body else None
        path = endpoint.build_path(**params)
        return self._send(endpoint.method, path, body, endpoint.decode, name)

    # -------------------------------------------------------------------
    # Boards and blocks batches
    # -------------------------------------------------------------------

    def create_boards_and_blocks(self, boards_and_blocks: BoardsAndBlocks) -> BoardsAndBlocks:
        """Create boards and their blocks in one atomic request.

        Raises a BatchValidationError subclass before sending when the
        batch has no boards, no blocks, or a block outside the batch's boards.
        """
        boards_and_blocks.is_valid()
        value, _ = self._send(
            "POST",
            BOARDS_AND_BLOCKS_ROUTE,
            boards_and_blocks,
            BoardsAndBlocks,
            "create_boards_and_blocks",
        )
        return value

    def patch_boards_and_blocks(self, patch: PatchBoardsAndBlocks) -> BoardsAndBlocks:
        """Apply positional board/block patches in one atomic request."""
        patch.is_valid()
        value, _ = self._send(
            "PATCH",
            BOARDS_AND_BLOCKS_ROUTE,
            patch,
            BoardsAndBlocks,
            "patch_boards_and_blocks",
        )
        return value

    def delete_boards_and_blocks(self, delete: DeleteBoardsAndBlocks) -> bool:
        delete.is_valid()
        value, _ = self._send("DELETE", BOARDS_AND_BLOCKS_ROUTE, delete, OK, "delete_boards_and_blocks")
        return value


def _make_operation(endpoint):
    def operation(self, *args, **kwargs):
        value, _ = self.invoke(endpoint.name, **_bind_args(endpoint, args, kwargs))
        return value

    operation.__name__ = endpoint.name
    operation.__qualname__ = f"BoardsClient.{endpoint.name}"
    operation.__doc__ = f"{endpoint.method} {endpoint.path} ({', '.join(endpoint.params)})"
    return operation


for _endpoint in ENDPOINTS:
    setattr(BoardsClient, _endpoint.name, _make_operation(_endpoint))
del _endpoint
