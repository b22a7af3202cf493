"""
Declarative table of the service's per-entity operations.

Each Endpoint names an HTTP method, a path template, the keyword
parameters that become query-string values, the keyword parameter (if
any) sent as the JSON body, and how the response is decoded.
BoardsClient turns every entry into a method of the same name.
"""

from __future__ import annotations

import string
import urllib.parse
from dataclasses import dataclass

from boards_client.models import (
    Block,
    BlocksComplianceHistoryResponse,
    Board,
    BoardInsightsList,
    BoardMember,
    BoardMetadata,
    BoardsAndBlocks,
    BoardsCloudLimits,
    BoardsComplianceHistoryResponse,
    BoardsComplianceResponse,
    BoardsStatistics,
    Card,
    Category,
    CategoryBoards,
    LoginResponse,
    Sharing,
    Subscription,
    Team,
    User,
)

# Decode kinds besides a model class or many(Model).
OK = "ok"  # drain the body, return True
NOTHING = "nothing"  # drain the body, return None
RAW = "raw"  # return the body bytes
JSON = "json"  # return the decoded JSON value as-is


@dataclass(frozen=True)
class Many:
    model: type


def many(model):
    return Many(model)


@dataclass(frozen=True)
class Param:
    """A keyword argument sent as a query-string value.

    ``flag`` params are only sent when truthy (``disable_notify=true``).
    """

    name: str
    wire: str | None = None
    flag: bool = False

    @property
    def key(self):
        return self.wire or self.name


DISABLE_NOTIFY = Param("disable_notify", flag=True)


def _format_query_value(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    decode: object = OK
    query: tuple = ()
    body: str | None = None
    fixed_query: tuple = ()

    @property
    def path_params(self):
        return tuple(
            field for _, field, _, _ in string.Formatter().parse(self.path) if field is not None
        )

    @property
    def params(self):
        """Every keyword argument the operation accepts, path params first."""
        names = list(self.path_params)
        if self.body:
            names.append(self.body)
        names.extend(p.name for p in self.query)
        return tuple(names)

    def build_path(self, **kwargs):
        """Render path + query string; unknown or missing params raise TypeError."""
        unknown = set(kwargs) - set(self.params)
        if unknown:
            raise TypeError(f"{self.name}() got unexpected arguments: {', '.join(sorted(unknown))}")
        missing = [p for p in self.path_params if kwargs.get(p) in (None, "")]
        if missing:
            raise TypeError(f"{self.name}() missing required arguments: {', '.join(missing)}")

        path = self.path.format(
            **{p: urllib.parse.quote(str(kwargs[p]), safe="") for p in self.path_params}
        )
        pairs = list(self.fixed_query)
        for param in self.query:
            value = kwargs.get(param.name)
            if value is None or value == "" or (param.flag and not value):
                continue
            pairs.append((param.key, _format_query_value(value)))
        if pairs:
            path += "?" + urllib.parse.urlencode(pairs)
        return path


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

TEAMS_ROUTE = "/teams"
BOARDS_ROUTE = "/boards"
CARDS_ROUTE = "/cards"
BOARDS_AND_BLOCKS_ROUTE = "/boards-and-blocks"
SUBSCRIPTIONS_ROUTE = "/subscriptions"
ME_ROUTE = "/users/me"

_TEAM = TEAMS_ROUTE + "/{team_id}"
_BOARD = BOARDS_ROUTE + "/{board_id}"
_BLOCK = _BOARD + "/blocks/{block_id}"
_CATEGORY = _TEAM + "/categories/{category_id}"

_PAGING = (Param("page"), Param("per_page"))


ENDPOINTS = (
    # Teams and insights
    Endpoint("get_team", "GET", _TEAM, Team),
    Endpoint(
        "get_team_boards_insights",
        "GET",
        _TEAM + "/boards/insights",
        BoardInsightsList,
        query=(Param("time_range"), *_PAGING),
    ),
    Endpoint(
        "get_user_boards_insights",
        "GET",
        ME_ROUTE + "/boards/insights",
        BoardInsightsList,
        query=(Param("time_range"), *_PAGING, Param("team_id")),
    ),
    Endpoint("get_templates_for_team", "GET", _TEAM + "/templates", many(Board)),
    # Boards
    Endpoint("create_board", "POST", BOARDS_ROUTE, Board, body="board"),
    Endpoint("patch_board", "PATCH", _BOARD, Board, body="patch"),
    Endpoint("delete_board", "DELETE", _BOARD),
    Endpoint("undelete_board", "POST", _BOARD + "/undelete"),
    Endpoint("get_board", "GET", _BOARD, Board, query=(Param("read_token"),)),
    Endpoint(
        "get_board_metadata",
        "GET",
        _BOARD + "/metadata",
        BoardMetadata,
        query=(Param("read_token"),),
    ),
    Endpoint("get_boards_for_team", "GET", _TEAM + "/boards", many(Board)),
    Endpoint(
        "search_boards_for_user",
        "GET",
        _TEAM + "/boards/search",
        many(Board),
        query=(Param("term", "q"), Param("field")),
    ),
    Endpoint(
        "search_boards_for_team",
        "GET",
        _TEAM + "/boards/search",
        many(Board),
        query=(Param("term", "q"),),
    ),
    Endpoint(
        "duplicate_board",
        "POST",
        _BOARD + "/duplicate",
        BoardsAndBlocks,
        query=(Param("as_template", "asTemplate"), Param("to_team", "toTeam")),
    ),
    Endpoint("export_board_archive", "GET", _BOARD + "/archive/export", RAW),
    # Blocks
    Endpoint("get_blocks_for_board", "GET", _BOARD + "/blocks", many(Block)),
    Endpoint(
        "get_all_blocks_for_board",
        "GET",
        _BOARD + "/blocks",
        many(Block),
        fixed_query=(("all", "true"),),
    ),
    Endpoint(
        "insert_blocks",
        "POST",
        _BOARD + "/blocks",
        many(Block),
        body="blocks",
        query=(DISABLE_NOTIFY,),
    ),
    Endpoint("patch_block", "PATCH", _BLOCK, body="block_patch", query=(DISABLE_NOTIFY,)),
    Endpoint("delete_block", "DELETE", _BLOCK, query=(DISABLE_NOTIFY,)),
    Endpoint("undelete_block", "POST", _BLOCK + "/undelete"),
    Endpoint(
        "duplicate_block",
        "POST",
        _BLOCK + "/duplicate",
        query=(Param("as_template", "asTemplate"),),
    ),
    Endpoint(
        "move_content_block",
        "POST",
        "/content-blocks/{src_block_id}/moveto/{where}/{dst_block_id}",
    ),
    # Cards
    Endpoint(
        "create_card",
        "POST",
        _BOARD + "/cards",
        Card,
        body="card",
        query=(DISABLE_NOTIFY,),
    ),
    Endpoint("get_cards", "GET", _BOARD + "/cards", many(Card), query=_PAGING),
    Endpoint(
        "patch_card",
        "PATCH",
        CARDS_ROUTE + "/{card_id}",
        Card,
        body="card_patch",
        query=(DISABLE_NOTIFY,),
    ),
    Endpoint("get_card", "GET", CARDS_ROUTE + "/{card_id}", Card),
    # Categories
    Endpoint("create_category", "POST", _TEAM + "/categories", Category, body="category"),
    Endpoint("delete_category", "DELETE", _CATEGORY, NOTHING),
    Endpoint("update_category_board", "POST", _CATEGORY + "/boards/{board_id}", NOTHING),
    Endpoint("get_user_category_boards", "GET", _TEAM + "/categories", many(CategoryBoards)),
    Endpoint("reorder_categories", "PUT", _TEAM + "/categories/reorder", JSON, body="new_order"),
    Endpoint("reorder_category_boards", "PUT", _CATEGORY + "/reorder", JSON, body="new_order"),
    Endpoint("hide_board", "PUT", _CATEGORY + "/boards/{board_id}/hide", NOTHING),
    Endpoint("unhide_board", "PUT", _CATEGORY + "/boards/{board_id}/unhide", NOTHING),
    # Members
    Endpoint("get_members_for_board", "GET", _BOARD + "/members", many(BoardMember)),
    Endpoint("add_member_to_board", "POST", _BOARD + "/members", BoardMember, body="member"),
    Endpoint("join_board", "POST", _BOARD + "/join", BoardMember),
    Endpoint("leave_board", "POST", _BOARD + "/leave", BoardMember),
    Endpoint(
        "update_board_member",
        "PUT",
        _BOARD + "/members/{user_id}",
        BoardMember,
        body="member",
    ),
    Endpoint("delete_board_member", "DELETE", _BOARD + "/members/{user_id}"),
    # Sharing
    Endpoint("get_sharing", "GET", _BOARD + "/sharing", Sharing),
    Endpoint("post_sharing", "POST", _BOARD + "/sharing", body="sharing"),
    # Users and auth
    Endpoint("register", "POST", "/register", body="request"),
    Endpoint("login", "POST", "/login", LoginResponse, body="request"),
    Endpoint("get_me", "GET", ME_ROUTE, User),
    Endpoint("get_user", "GET", "/users/{user_id}", User),
    Endpoint("get_user_list", "POST", "/users", many(User), body="user_ids"),
    Endpoint("user_change_password", "POST", "/users/{user_id}/changepassword", body="request"),
    # Files
    Endpoint(
        "team_upload_file_info",
        "GET",
        "/files/teams/{team_id}/{board_id}/{file_name}/info",
        JSON,
    ),
    # Subscriptions
    Endpoint(
        "create_subscription",
        "POST",
        SUBSCRIPTIONS_ROUTE,
        Subscription,
        body="subscription",
    ),
    Endpoint(
        "delete_subscription",
        "DELETE",
        SUBSCRIPTIONS_ROUTE + "/{block_id}/{subscriber_id}",
        NOTHING,
    ),
    Endpoint("get_subscriptions", "GET", SUBSCRIPTIONS_ROUTE + "/{subscriber_id}", many(Subscription)),
    # System and compliance
    Endpoint("get_limits", "GET", "/limits", BoardsCloudLimits),
    Endpoint("get_statistics", "GET", "/statistics", BoardsStatistics),
    Endpoint(
        "get_boards_for_compliance",
        "GET",
        "/admin/boards",
        BoardsComplianceResponse,
        query=(Param("team_id"), *_PAGING),
    ),
    Endpoint(
        "get_boards_compliance_history",
        "GET",
        "/admin/boards_history",
        BoardsComplianceHistoryResponse,
        query=(
            Param("modified_since"),
            Param("include_deleted"),
            Param("team_id"),
            *_PAGING,
        ),
    ),
    Endpoint(
        "get_blocks_compliance_history",
        "GET",
        "/admin/blocks_history",
        BlocksComplianceHistoryResponse,
        query=(
            Param("modified_since"),
            Param("include_deleted"),
            Param("team_id"),
            Param("board_id"),
            *_PAGING,
        ),
    ),
)

ENDPOINTS_BY_NAME = {endpoint.name: endpoint for endpoint in ENDPOINTS}
