"""boards-client: Python client and data model for the boards service API."""

from boards_client.batch import (
    find_orphan_blocks,
    validate_create_batch,
    validate_delete_batch,
    validate_patch_batch,
)
from boards_client.client import BoardsClient
from boards_client.config import VERSION
from boards_client.exceptions import (
    BatchValidationError,
    BlockListMismatchError,
    BoardListMismatchError,
    BoardsError,
    ConnectionFailedError,
    DecodeError,
    InvalidBlockTypeError,
    MalformedBatchError,
    NoBlocksError,
    NoBoardsError,
    OrphanBlockError,
    RequestFailedError,
    SetupError,
    TransportError,
)
from boards_client.files import (
    FileInfo,
    is_media_content_type,
    is_unsafe_content_type,
    new_file_info,
)
from boards_client.models import (
    Block,
    BlockPatch,
    BlockType,
    Board,
    BoardPatch,
    BoardsAndBlocks,
    Card,
    CardPatch,
    DeleteBoardsAndBlocks,
    PatchBoardsAndBlocks,
)
from boards_client.transport import RawResult, Response, Transport, decode_json

__all__ = [
    "VERSION",
    "BoardsClient",
    "Transport",
    "RawResult",
    "Response",
    "decode_json",
    "Board",
    "BoardPatch",
    "Block",
    "BlockPatch",
    "BlockType",
    "BoardsAndBlocks",
    "PatchBoardsAndBlocks",
    "DeleteBoardsAndBlocks",
    "Card",
    "CardPatch",
    "find_orphan_blocks",
    "validate_create_batch",
    "validate_patch_batch",
    "validate_delete_batch",
    "FileInfo",
    "new_file_info",
    "is_unsafe_content_type",
    "is_media_content_type",
    "BoardsError",
    "SetupError",
    "BatchValidationError",
    "NoBoardsError",
    "NoBlocksError",
    "OrphanBlockError",
    "BoardListMismatchError",
    "BlockListMismatchError",
    "MalformedBatchError",
    "InvalidBlockTypeError",
    "TransportError",
    "ConnectionFailedError",
    "RequestFailedError",
    "DecodeError",
]
