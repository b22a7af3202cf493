"""
Structural validation for boards-and-blocks batch payloads.

These checks run before a batch request is sent; the server enforces the
same rules. Functions are pure: they never mutate their arguments, keep no
state and do no I/O. Boards and blocks are read by attribute (``id``,
``board_id``) so any object with those attributes can be validated.
"""

from boards_client.exceptions import (
    BlockListMismatchError,
    BoardListMismatchError,
    MalformedBatchError,
    NoBlocksError,
    NoBoardsError,
    OrphanBlockError,
)


def find_orphan_blocks(boards, blocks):
    """Return ids of blocks whose board is not part of *boards*, in input order."""
    board_ids = {board.id for board in boards or ()}
    return [block.id for block in blocks or () if block.board_id not in board_ids]


def validate_create_batch(boards, blocks):
    """Check a create batch. Raises on the first violation.

    Precedence is fixed: no boards, then no blocks, then the first orphan block.
    """
    if not boards:
        raise NoBoardsError()
    if not blocks:
        raise NoBlocksError()

    orphans = find_orphan_blocks(boards, blocks)
    if orphans:
        raise OrphanBlockError(orphans[0])


def validate_patch_batch(board_ids, board_patches, block_ids, block_patches):
    """Check a patch batch: patch ``i`` applies to id ``i`` in each pair.

    Block lists may be empty; only the board side must be populated.
    """
    if not board_ids:
        raise NoBoardsError()
    if len(board_ids) != len(board_patches or ()):
        raise BoardListMismatchError()
    if len(block_ids or ()) != len(block_patches or ()):
        raise BlockListMismatchError()


def validate_delete_batch(board_ids, block_ids):
    """A delete batch only needs to be two lists of ids."""
    for ids in (board_ids, block_ids):
        if ids is None:
            continue
        if not isinstance(ids, (list, tuple)):
            raise MalformedBatchError()
        if not all(isinstance(i, str) for i in ids):
            raise MalformedBatchError()
