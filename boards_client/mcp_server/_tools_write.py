"""Write tools: atomic boards-and-blocks batches (3 tools)."""

from __future__ import annotations

from boards_client import BoardsError
from boards_client.mcp_server._core import (
    _call,
    _contract_error,
    _finalize_tool_result,
    _validate_id_list,
)
from boards_client.mcp_server._security import _clean_payload, _sanitize_batch
from boards_client.models import (
    Block,
    BlockPatch,
    Board,
    BoardPatch,
    BoardsAndBlocks,
    DeleteBoardsAndBlocks,
    PatchBoardsAndBlocks,
)


def _batch_result(result):
    if isinstance(result, dict) and result.get("ok") is not False:
        result = _sanitize_batch(result)
    return _finalize_tool_result(result)


def create_boards_and_blocks(boards: list[dict], blocks: list[dict]) -> dict:
    """Create boards and their blocks atomically.

    Every block's boardId must match the id of a board in ``boards``; the
    server assigns the final IDs and returns them.

    Args:
        boards: Board objects (id, teamId, title, type "O"/"P", ...).
        blocks: Block objects (id, boardId, type, parentId, title, fields).

    Returns:
        Dict with the created boards and blocks.
    """
    try:
        payload = BoardsAndBlocks(
            boards=[Board.from_dict(_clean_payload(b)) for b in boards or []],
            blocks=[Block.from_dict(_clean_payload(b)) for b in blocks or []],
        )
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _batch_result(_call("create_boards_and_blocks", boards_and_blocks=payload))


def patch_boards_and_blocks(
    board_ids: list[str],
    board_patches: list[dict],
    block_ids: list[str] | None = None,
    block_patches: list[dict] | None = None,
) -> dict:
    """Patch boards and blocks atomically. Patch i applies to ID i in each pair.

    Args:
        board_ids: At least one board ID.
        board_patches: Same length as board_ids (title, description, icon, ...).
        block_ids: Optional block IDs.
        block_patches: Same length as block_ids (title, parentId, updatedFields, ...).

    Returns:
        Dict with the patched boards and blocks.
    """
    try:
        _validate_id_list(board_ids)
        _validate_id_list(block_ids or [], "block_ids")
        payload = PatchBoardsAndBlocks(
            board_ids=list(board_ids),
            board_patches=[BoardPatch.from_dict(_clean_payload(p)) for p in board_patches or []],
            block_ids=list(block_ids or []),
            block_patches=[BlockPatch.from_dict(_clean_payload(p)) for p in block_patches or []],
        )
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    return _batch_result(_call("patch_boards_and_blocks", patch=payload))


def delete_boards_and_blocks(board_ids: list[str], block_ids: list[str] | None = None) -> dict:
    """Delete boards and blocks atomically. Deleting a board removes its blocks."""
    try:
        _validate_id_list(board_ids)
        _validate_id_list(block_ids or [], "block_ids")
    except BoardsError as e:
        return _finalize_tool_result(_contract_error(str(e), "error"))
    payload = DeleteBoardsAndBlocks(boards=list(board_ids), blocks=list(block_ids or []))
    result = _call("delete_boards_and_blocks", delete=payload)
    if result is True:
        result = {"deleted_boards": len(payload.boards), "deleted_blocks": len(payload.blocks)}
    return _finalize_tool_result(result)


def register(mcp):
    """Register all write tools with the FastMCP instance."""
    mcp.tool()(create_boards_and_blocks)
    mcp.tool()(patch_boards_and_blocks)
    mcp.tool()(delete_boards_and_blocks)
