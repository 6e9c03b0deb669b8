"""Tests for pagemap.routing.pattern: path-pattern rendering."""

from __future__ import annotations

from pagemap.routing.pattern import (
    encode_static,
    join_url,
    render_segment,
    render_token,
    with_leading_slash,
)
from pagemap.routing.tokens import SegmentToken, tokenize_segment


class TestRenderToken:
    """Each token kind has a fixed encoding."""

    def test_dynamic(self) -> None:
        assert render_token(SegmentToken("dynamic", "id")) == ":id()"

    def test_optional(self) -> None:
        assert render_token(SegmentToken("optional", "slug")) == ":slug?"

    def test_catchall_last(self) -> None:
        assert render_token(SegmentToken("catchall", "slug")) == ":slug(.*)*"

    def test_catchall_with_following_segment(self) -> None:
        token = SegmentToken("catchall", "slug")
        assert render_token(token, has_following_segment=True) == ":slug([^/]*)*"

    def test_group_renders_empty(self) -> None:
        assert render_token(SegmentToken("group", "admin")) == ""

    def test_static(self) -> None:
        assert render_token(SegmentToken("static", "about")) == "about"


class TestRenderSegment:
    """render_segment prefixes a slash and concatenates in order."""

    def test_single_dynamic(self) -> None:
        assert render_segment(tokenize_segment("[id]")) == "/:id()"

    def test_mixed(self) -> None:
        assert render_segment(tokenize_segment("user-[id]")) == "/user-:id()"

    def test_group_only_renders_bare_slash(self) -> None:
        assert render_segment(tokenize_segment("(admin)")) == "/"

    def test_following_only_affects_catchall(self) -> None:
        tokens = tokenize_segment("[id]")
        assert render_segment(tokens, True) == render_segment(tokens, False)


class TestEncodeStatic:
    """Static text is percent-encoded and colons are escaped."""

    def test_plain_text_unchanged(self) -> None:
        assert encode_static("getting-started") == "getting-started"

    def test_space_encoded(self) -> None:
        assert encode_static("hello world") == "hello%20world"

    def test_colon_escaped(self) -> None:
        assert encode_static("a:b") == "a\\:b"

    def test_reserved_query_chars_encoded(self) -> None:
        assert encode_static("a#b?c&d+e") == "a%23b%3Fc%26d%2Be"

    def test_unicode_encoded(self) -> None:
        assert encode_static("café") == "caf%C3%A9"

    def test_pipe_kept(self) -> None:
        assert encode_static("a|b") == "a|b"


class TestJoinUrl:
    """join_url joins with exactly one slash."""

    def test_empty_base(self) -> None:
        assert join_url("", "/users") == "/users"

    def test_join_two(self) -> None:
        assert join_url("/users", "/:id()") == "/users/:id()"

    def test_bare_slash_skipped(self) -> None:
        assert join_url("/users", "/") == "/users"

    def test_empty_everything(self) -> None:
        assert join_url("", "/") == ""

    def test_base_trailing_slash(self) -> None:
        assert join_url("/users/", "edit") == "/users/edit"

    def test_dot_slash_part(self) -> None:
        assert join_url("/a", "./b") == "/a/b"


class TestWithLeadingSlash:
    def test_adds_slash(self) -> None:
        assert with_leading_slash("users") == "/users"

    def test_keeps_slash(self) -> None:
        assert with_leading_slash("/users") == "/users"

    def test_empty_becomes_root(self) -> None:
        assert with_leading_slash("") == "/"
