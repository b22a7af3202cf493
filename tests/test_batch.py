"""Tests for batch.py: boards-and-blocks create/patch/delete validation."""

import copy

import pytest

from boards_client.batch import (
    find_orphan_blocks,
    validate_create_batch,
    validate_delete_batch,
    validate_patch_batch,
)
from boards_client.exceptions import (
    BatchValidationError,
    BlockListMismatchError,
    BoardListMismatchError,
    MalformedBatchError,
    NoBlocksError,
    NoBoardsError,
    OrphanBlockError,
)
from boards_client.models import (
    Block,
    BlockPatch,
    Board,
    BoardPatch,
    BoardsAndBlocks,
    DeleteBoardsAndBlocks,
    PatchBoardsAndBlocks,
)


def _boards(*ids):
    return [Board(id=i, team_id="team1") for i in ids]


def _block(block_id, board_id):
    return Block(id=block_id, board_id=board_id, type="card")


class TestValidateCreateBatch:
    def test_valid_batch(self):
        validate_create_batch(_boards("b1"), [_block("c1", "b1")])

    def test_no_boards(self):
        with pytest.raises(NoBoardsError):
            validate_create_batch([], [_block("c1", "b1")])

    def test_no_boards_wins_over_orphans_and_empty_blocks(self):
        with pytest.raises(NoBoardsError):
            validate_create_batch([], [])
        with pytest.raises(NoBoardsError):
            validate_create_batch([], [_block("c1", "zzz")])

    def test_none_lists_count_as_empty(self):
        with pytest.raises(NoBoardsError):
            validate_create_batch(None, None)
        with pytest.raises(NoBlocksError):
            validate_create_batch(_boards("b1"), None)

    def test_no_blocks(self):
        with pytest.raises(NoBlocksError):
            validate_create_batch(_boards("b1"), [])

    def test_orphan_block(self):
        with pytest.raises(OrphanBlockError) as exc_info:
            validate_create_batch(_boards("b1"), [_block("c1", "zzz")])
        assert exc_info.value.block_id == "c1"
        assert "c1" in str(exc_info.value)

    def test_reports_first_orphan(self):
        blocks = [_block("c1", "b1"), _block("c2", "x"), _block("c3", "y")]
        with pytest.raises(OrphanBlockError) as exc_info:
            validate_create_batch(_boards("b1"), blocks)
        assert exc_info.value.block_id == "c2"

    def test_two_boards_three_blocks(self):
        boards = _boards("A", "B")
        blocks = [_block("x1", "A"), _block("x2", "A"), _block("x3", "B")]
        validate_create_batch(boards, blocks)

        blocks[2].board_id = "C"
        with pytest.raises(OrphanBlockError) as exc_info:
            validate_create_batch(boards, blocks)
        assert exc_info.value.block_id == "x3"

    def test_does_not_mutate_inputs(self):
        boards = _boards("b1")
        blocks = [_block("c1", "b1"), _block("c2", "nope")]
        before = (copy.deepcopy(boards), copy.deepcopy(blocks))
        with pytest.raises(OrphanBlockError):
            validate_create_batch(boards, blocks)
        assert (boards, blocks) == before

    def test_same_result_on_repeat(self):
        boards, blocks = _boards("b1"), [_block("c1", "zzz")]
        errors = []
        for _ in range(2):
            with pytest.raises(OrphanBlockError) as exc_info:
                validate_create_batch(boards, blocks)
            errors.append((type(exc_info.value), exc_info.value.block_id))
        assert errors[0] == errors[1]


class TestFindOrphanBlocks:
    def test_lists_all_orphans_in_order(self):
        blocks = [_block("c1", "x"), _block("c2", "b1"), _block("c3", "y")]
        assert find_orphan_blocks(_boards("b1"), blocks) == ["c1", "c3"]

    def test_no_orphans(self):
        assert find_orphan_blocks(_boards("b1", "b2"), [_block("c1", "b2")]) == []


class TestValidatePatchBatch:
    def test_valid_batch(self):
        validate_patch_batch(["b1"], [BoardPatch(title="x")], ["c1"], [BlockPatch(title="y")])

    def test_board_only_batch_is_valid(self):
        validate_patch_batch(["b1"], [BoardPatch(title="x")], [], [])

    def test_no_boards(self):
        with pytest.raises(NoBoardsError):
            validate_patch_batch([], [], ["c1"], [BlockPatch()])

    def test_board_list_mismatch(self):
        with pytest.raises(BoardListMismatchError):
            validate_patch_batch(["b1", "b2"], [BoardPatch()], [], [])

    def test_block_list_mismatch(self):
        with pytest.raises(BlockListMismatchError):
            validate_patch_batch(
                ["b1", "b2"],
                [BoardPatch(), BoardPatch()],
                ["c1", "c2"],
                [BlockPatch(), BlockPatch(), BlockPatch()],
            )

    def test_board_mismatch_checked_before_block_mismatch(self):
        with pytest.raises(BoardListMismatchError):
            validate_patch_batch(["b1"], [], ["c1"], [])

    def test_same_result_on_repeat_without_mutation(self):
        board_ids, board_patches = ["b1"], [BoardPatch(title="x")]
        block_ids, block_patches = ["c1", "c2"], [BlockPatch(title="y")]
        before = copy.deepcopy((board_ids, board_patches, block_ids, block_patches))
        errors = []
        for _ in range(2):
            with pytest.raises(BlockListMismatchError) as exc_info:
                validate_patch_batch(board_ids, board_patches, block_ids, block_patches)
            errors.append(type(exc_info.value))
        assert errors[0] is errors[1]
        assert (board_ids, board_patches, block_ids, block_patches) == before

    def test_duplicate_ids_are_not_rejected(self):
        validate_patch_batch(["b1", "b1"], [BoardPatch(), BoardPatch()], [], [])


class TestValidateDeleteBatch:
    def test_valid(self):
        validate_delete_batch(["b1"], ["c1", "c2"])

    def test_empty_lists_are_valid(self):
        validate_delete_batch([], [])
        validate_delete_batch(None, None)

    def test_rejects_non_list(self):
        with pytest.raises(MalformedBatchError):
            validate_delete_batch("b1", [])

    def test_rejects_non_string_ids(self):
        with pytest.raises(MalformedBatchError):
            validate_delete_batch(["b1"], [1, 2])


class TestModelIsValid:
    def test_boards_and_blocks(self):
        BoardsAndBlocks(boards=_boards("b1"), blocks=[_block("c1", "b1")]).is_valid()
        with pytest.raises(NoBlocksError):
            BoardsAndBlocks(boards=_boards("b1")).is_valid()

    def test_patch_boards_and_blocks(self):
        with pytest.raises(BoardListMismatchError):
            PatchBoardsAndBlocks(board_ids=["b1"]).is_valid()

    def test_delete_boards_and_blocks(self):
        DeleteBoardsAndBlocks(boards=["b1"]).is_valid()

    def test_all_errors_share_base(self):
        for exc in (
            NoBoardsError(),
            NoBlocksError(),
            OrphanBlockError("c1"),
            BoardListMismatchError(),
            BlockListMismatchError(),
            MalformedBatchError(),
        ):
            assert isinstance(exc, BatchValidationError)
