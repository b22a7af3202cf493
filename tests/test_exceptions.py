"""Tests for the exception hierarchy and error messages."""

from boards_client.exceptions import (
    BatchValidationError,
    BlockListMismatchError,
    BoardListMismatchError,
    BoardsError,
    ConnectionFailedError,
    DecodeError,
    InvalidBlockTypeError,
    NoBlocksError,
    NoBoardsError,
    OrphanBlockError,
    RequestFailedError,
    SetupError,
    TransportError,
)


class TestExceptionHierarchy:
    def test_boards_error_is_exception(self):
        assert issubclass(BoardsError, Exception)

    def test_setup_error_is_boards_error(self):
        assert issubclass(SetupError, BoardsError)

    def test_exit_codes(self):
        assert BoardsError.exit_code == 1
        assert SetupError.exit_code == 2

    def test_batch_errors_are_not_transport_errors(self):
        assert issubclass(BatchValidationError, BoardsError)
        assert not issubclass(BatchValidationError, TransportError)

    def test_transport_family(self):
        for cls in (ConnectionFailedError, RequestFailedError, DecodeError):
            assert issubclass(cls, TransportError)


class TestBatchMessages:
    def test_fixed_messages(self):
        assert str(NoBoardsError()) == "at least one board is required"
        assert str(NoBlocksError()) == "at least one block is required"
        assert str(BoardListMismatchError()) == "board ids and patches need to match"
        assert str(BlockListMismatchError()) == "block ids and patches need to match"

    def test_orphan_message(self):
        assert str(OrphanBlockError("c9")) == "block c9 doesn't belong to any board"

    def test_custom_message(self):
        assert str(NoBoardsError("nothing to create")) == "nothing to create"

    def test_invalid_block_type(self):
        err = InvalidBlockTypeError("spreadsheet")
        assert err.type == "spreadsheet"
        assert str(err) == "spreadsheet is an invalid block type."


class TestTransportErrors:
    def test_connection_failed_keeps_cause(self):
        cause = ConnectionRefusedError("refused")
        err = ConnectionFailedError(cause, url="https://x/api/v2/boards")
        assert err.cause is cause
        assert "https://x/api/v2/boards" in str(err)
        assert "refused" in str(err)

    def test_connection_failed_without_url(self):
        assert str(ConnectionFailedError("dns")) == "[ERROR] Connection failed: dns"

    def test_request_failed_payload(self):
        err = RequestFailedError(500, b"boom")
        assert err.status_code == 500
        assert err.code == 500
        assert str(err) == "payload: boom"
        assert err.headers == {}

    def test_request_failed_empty_body(self):
        err = RequestFailedError(404, None)
        assert err.body == b""
        assert str(err) == "payload: "
        assert err.error_message() is None

    def test_error_message_from_json(self):
        assert RequestFailedError(400, b'{"error": "bad id"}').error_message() == "bad id"
        assert RequestFailedError(400, b'{"message": "nope"}').error_message() == "nope"
        assert RequestFailedError(400, b"[1, 2]").error_message() is None
        assert RequestFailedError(400, b"\xff\xfe").error_message() is None

    def test_decode_error_context(self):
        err = DecodeError(ValueError("bad"), context="get_board")
        assert err.context == "get_board"
        assert str(err) == "[ERROR] Could not decode get_board: bad"
