"""
Typed models for board, block and batch payloads.

Every model is a dataclass that round-trips through the service's JSON
shape (camelCase keys unless a field overrides its key). Models are
transient request/response values; the remote service owns the state.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields

from boards_client.batch import (
    validate_create_batch,
    validate_delete_batch,
    validate_patch_batch,
)
from boards_client.exceptions import DecodeError, InvalidBlockTypeError


def _camel(name):
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _key(f):
    return f.metadata.get("json") or _camel(f.name)


def _encode(value):
    if isinstance(value, _Model):
        return value.to_dict()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


def _json(key, **kwargs):
    """Field whose wire key does not follow the camelCase convention."""
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    return field(metadata={"json": key}, **kwargs)


def _nested(model, key=None, many=False):
    meta = {"model": model, "many": many}
    if key:
        meta["json"] = key
    if many:
        return field(default_factory=list, metadata=meta)
    return field(default=None, metadata=meta)


class _Model:
    """Shared JSON (de)serialization for dataclass models."""

    # Patches only carry the fields the caller set.
    _omit_none = False

    def to_dict(self):
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and self._omit_none:
                continue
            out[_key(f)] = _encode(value)
        return out

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise DecodeError(
                f"expected JSON object, got {type(data).__name__}", context=cls.__name__
            )
        kwargs = {}
        for f in fields(cls):
            key = _key(f)
            if key not in data:
                continue
            value = data[key]
            model = f.metadata.get("model")
            if model is not None and value is not None:
                if f.metadata.get("many"):
                    value = [model.from_dict(v) for v in value]
                else:
                    value = model.from_dict(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    @classmethod
    def list_from_json(cls, data):
        if not isinstance(data, list):
            raise DecodeError(
                f"expected JSON array, got {type(data).__name__}", context=f"{cls.__name__} list"
            )
        return [cls.from_dict(item) for item in data]


# ---------------------------------------------------------------------------
# Block types
# ---------------------------------------------------------------------------


class BlockType(str, enum.Enum):
    UNKNOWN = "unknown"
    BOARD = "board"
    CARD = "card"
    VIEW = "view"
    TEXT = "text"
    CHECKBOX = "checkbox"
    COMMENT = "comment"
    IMAGE = "image"
    ATTACHMENT = "attachment"
    DIVIDER = "divider"

    def __str__(self):
        return self.value

    @classmethod
    def from_string(cls, value):
        """Return the BlockType for *value* (case-insensitive).

        Raises InvalidBlockTypeError for anything outside the closed set;
        ``"unknown"`` itself is not accepted as input.
        """
        lowered = (value or "").lower()
        if lowered and lowered != cls.UNKNOWN.value:
            for member in cls:
                if member.value == lowered:
                    return member
        raise InvalidBlockTypeError(value)

    @classmethod
    def parse(cls, value):
        """Lenient variant used when decoding: unknown strings map to UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls.from_string(value)
        except InvalidBlockTypeError:
            return cls.UNKNOWN


# ---------------------------------------------------------------------------
# Boards and blocks
# ---------------------------------------------------------------------------


@dataclass
class Board(_Model):
    id: str = ""
    team_id: str = ""
    channel_id: str = ""
    created_by: str = ""
    modified_by: str = ""
    type: str = "O"
    minimum_role: str = ""
    title: str = ""
    description: str = ""
    icon: str = ""
    show_description: bool = False
    is_template: bool = False
    template_version: int = 0
    properties: dict = field(default_factory=dict)
    card_properties: list = field(default_factory=list)
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0


@dataclass
class BoardPatch(_Model):
    _omit_none = True

    type: str | None = None
    minimum_role: str | None = None
    title: str | None = None
    description: str | None = None
    icon: str | None = None
    show_description: bool | None = None
    channel_id: str | None = None
    updated_properties: dict | None = None
    deleted_properties: list | None = None
    updated_card_properties: list | None = None
    deleted_card_properties: list | None = None


@dataclass
class Block(_Model):
    id: str = ""
    board_id: str = ""
    type: BlockType = BlockType.UNKNOWN
    parent_id: str = ""
    created_by: str = ""
    modified_by: str = ""
    schema: int = 1
    title: str = ""
    fields: dict = field(default_factory=dict)
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0

    def __post_init__(self):
        self.type = BlockType.parse(self.type)


@dataclass
class BlockPatch(_Model):
    _omit_none = True

    parent_id: str | None = None
    schema: int | None = None
    type: BlockType | None = None
    title: str | None = None
    updated_fields: dict | None = None
    deleted_fields: list | None = None


# ---------------------------------------------------------------------------
# Batch payloads
# ---------------------------------------------------------------------------


@dataclass
class BoardsAndBlocks(_Model):
    """Boards and blocks created (or returned) together in one request."""

    boards: list[Board] = _nested(Board, many=True)
    blocks: list[Block] = _nested(Block, many=True)

    def is_valid(self):
        validate_create_batch(self.boards, self.blocks)


@dataclass
class PatchBoardsAndBlocks(_Model):
    """Positional patch lists: ``board_patches[i]`` applies to ``board_ids[i]``."""

    board_ids: list[str] = _json("boardIDs", default_factory=list)
    board_patches: list[BoardPatch] = _nested(BoardPatch, "boardPatches", many=True)
    block_ids: list[str] = _json("blockIDs", default_factory=list)
    block_patches: list[BlockPatch] = _nested(BlockPatch, "blockPatches", many=True)

    def is_valid(self):
        validate_patch_batch(self.board_ids, self.board_patches, self.block_ids, self.block_patches)


@dataclass
class DeleteBoardsAndBlocks(_Model):
    boards: list[str] = field(default_factory=list)
    blocks: list[str] = field(default_factory=list)

    def is_valid(self):
        validate_delete_batch(self.boards, self.blocks)


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


@dataclass
class Card(_Model):
    id: str = ""
    board_id: str = ""
    created_by: str = ""
    modified_by: str = ""
    title: str = ""
    content_order: list = field(default_factory=list)
    icon: str = ""
    is_template: bool = False
    properties: dict = field(default_factory=dict)
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0


@dataclass
class CardPatch(_Model):
    _omit_none = True

    title: str | None = None
    content_order: list | None = None
    icon: str | None = None
    updated_properties: dict | None = None


# ---------------------------------------------------------------------------
# Members, metadata, sharing
# ---------------------------------------------------------------------------


@dataclass
class BoardMember(_Model):
    board_id: str = ""
    user_id: str = ""
    roles: str = ""
    minimum_role: str = ""
    scheme_admin: bool = False
    scheme_editor: bool = False
    scheme_commenter: bool = False
    scheme_viewer: bool = False
    synthetic: bool = False


@dataclass
class BoardMetadata(_Model):
    board_id: str = ""
    descendant_last_update_at: int = 0
    descendant_first_update_at: int = 0
    created_by: str = ""
    last_modified_by: str = ""


@dataclass
class Sharing(_Model):
    id: str = ""
    enabled: bool = False
    token: str = ""
    modified_by: str = ""
    update_at: int = 0


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@dataclass
class Category(_Model):
    id: str = ""
    name: str = ""
    user_id: str = ""
    team_id: str = ""
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    collapsed: bool = False
    sort_order: int = 0
    sorting: str = ""
    type: str = ""


@dataclass
class CategoryBoardMetadata(_Model):
    board_id: str = _json("boardID", default="")
    hidden: bool = False


@dataclass
class CategoryBoards(Category):
    """A category together with the boards filed under it."""

    board_metadata: list[CategoryBoardMetadata] = _nested(CategoryBoardMetadata, many=True)


# ---------------------------------------------------------------------------
# Teams, users, auth
# ---------------------------------------------------------------------------


@dataclass
class Team(_Model):
    id: str = ""
    title: str = ""
    signup_token: str = ""
    settings: dict = field(default_factory=dict)
    modified_by: str = ""
    update_at: int = 0


@dataclass
class User(_Model):
    id: str = ""
    username: str = ""
    email: str = ""
    nickname: str = ""
    first_name: str = ""
    last_name: str = ""
    props: dict = field(default_factory=dict)
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    is_bot: bool = False
    is_guest: bool = False
    roles: str = ""


@dataclass
class LoginRequest(_Model):
    type: str = "normal"
    username: str = ""
    email: str = ""
    password: str = ""
    mfa_token: str = ""


@dataclass
class LoginResponse(_Model):
    token: str = ""


@dataclass
class RegisterRequest(_Model):
    username: str = ""
    email: str = ""
    password: str = ""
    token: str = ""


@dataclass
class ChangePasswordRequest(_Model):
    old_password: str = _json("oldPassword", default="")
    new_password: str = _json("newPassword", default="")


# ---------------------------------------------------------------------------
# Subscriptions and notifications
# ---------------------------------------------------------------------------


@dataclass
class Subscription(_Model):
    block_type: BlockType = BlockType.UNKNOWN
    block_id: str = ""
    subscriber_type: str = "user"
    subscriber_id: str = ""
    notified_at: int = 0
    create_at: int = 0
    delete_at: int = 0

    def __post_init__(self):
        self.block_type = BlockType.parse(self.block_type)


@dataclass
class NotificationHint(_Model):
    """Hint that a block changed and its subscribers should be notified."""

    block_type: BlockType = _json("block_type", default=BlockType.UNKNOWN)
    block_id: str = _json("block_id", default="")
    modified_by_id: str = _json("modified_by_id", default="")
    create_at: int = _json("create_at", default=0)
    notify_at: int = _json("notify_at", default=0)

    def __post_init__(self):
        self.block_type = BlockType.parse(self.block_type)


# ---------------------------------------------------------------------------
# Insights, statistics, limits, compliance
# ---------------------------------------------------------------------------


@dataclass
class BoardInsight(_Model):
    board_id: str = _json("boardID", default="")
    icon: str = ""
    title: str = ""
    activity_count: str = ""
    active_users: list = field(default_factory=list)
    created_by: str = ""


@dataclass
class BoardInsightsList(_Model):
    has_next: bool = _json("has_next", default=False)
    items: list[BoardInsight] = _nested(BoardInsight, many=True)


@dataclass
class BoardsStatistics(_Model):
    boards: int = _json("board_count", default=0)
    cards: int = _json("card_count", default=0)


@dataclass
class BoardsCloudLimits(_Model):
    cards: int = 0
    used_cards: int = _json("used_cards", default=0)
    card_limit_timestamp: int = _json("card_limit_timestamp", default=0)
    views: int = 0


@dataclass
class BoardsComplianceResponse(_Model):
    has_next: bool = _json("hasNext", default=False)
    results: list[Board] = _nested(Board, many=True)


@dataclass
class BoardHistory(_Model):
    id: str = ""
    team_id: str = ""
    is_deleted: bool = False
    descendant_last_update_at: int = 0
    descendant_first_update_at: int = 0
    created_by: str = ""
    last_modified_by: str = ""


@dataclass
class BlockHistory(_Model):
    id: str = ""
    team_id: str = ""
    board_id: str = ""
    is_deleted: bool = False
    last_update_at: int = 0
    first_update_at: int = 0
    created_by: str = ""
    last_modified_by: str = ""


@dataclass
class BoardsComplianceHistoryResponse(_Model):
    has_next: bool = _json("hasNext", default=False)
    results: list[BoardHistory] = _nested(BoardHistory, many=True)


@dataclass
class BlocksComplianceHistoryResponse(_Model):
    has_next: bool = _json("hasNext", default=False)
    results: list[BlockHistory] = _nested(BlockHistory, many=True)
