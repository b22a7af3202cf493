"""Read tools: boards, blocks, cards and members (5 tools)."""

from __future__ import annotations

from boards_client import BoardsError
from boards_client.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id,
)
from boards_client.mcp_server._security import _sanitize_entity


def _sanitized_list(result):
    if isinstance(result, list):
        return [_sanitize_entity(item) for item in result]
    return result


def get_board(board_id: str, read_token: str | None = None) -> dict:
    """Get a single board.

    Args:
        board_id: Board ID.
        read_token: Share token for read-only access to a shared board.

    Returns:
        Board dict (id, teamId, title, description, properties, ...).
    """
    try:
        _validate_id(board_id)
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("get_board", board_id=board_id, read_token=read_token)
    if isinstance(result, dict) and result.get("ok") is not False:
        result = _sanitize_entity(result)
    return _finalize_tool_result(result)


def list_team_boards(team_id: str) -> list | dict:
    """List the boards of a team visible to the current user."""
    try:
        _validate_id(team_id, "team_id")
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_sanitized_list(_call("get_boards_for_team", team_id=team_id)))


def list_board_blocks(board_id: str, include_all: bool = False) -> list | dict:
    """List the blocks of a board.

    Args:
        include_all: True to include blocks of every type and depth.
    """
    try:
        _validate_id(board_id)
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    method = "get_all_blocks_for_board" if include_all else "get_blocks_for_board"
    return _finalize_tool_result(_sanitized_list(_call(method, board_id=board_id)))


def list_board_cards(board_id: str, page: int = 0, per_page: int = 100) -> list | dict:
    """List cards of a board, one page at a time (page is 0-based)."""
    try:
        _validate_id(board_id)
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    result = _call("get_cards", board_id=board_id, page=page, per_page=per_page)
    return _finalize_tool_result(_sanitized_list(result))


def list_board_members(board_id: str) -> list | dict:
    try:
        _validate_id(board_id)
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _finalize_tool_result(_call("get_members_for_board", board_id=board_id))


def register(mcp):
    """Register all read tools with the FastMCP instance."""
    mcp.tool()(get_board)
    mcp.tool()(list_team_boards)
    mcp.tool()(list_board_blocks)
    mcp.tool()(list_board_cards)
    mcp.tool()(list_board_members)
