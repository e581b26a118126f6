"""Behavior tests for flattening tree listings into entry paths."""

from __future__ import annotations

import logging

import pytest

from ironpass.listing import (
    count_leading_spaces,
    depth_of,
    flatten_tree,
    is_header_line,
    is_markup_character,
    normalize_margin,
    parse_listing,
)

pytestmark = pytest.mark.unit

BALANCED_LISTING = """
            Search Terms: google
            ├── google.com
            │   ├── u1
            │   └── u2
            └── apple.com
                └── u1"""


class TestParseListing:
    def test_balanced_tree(self) -> None:
        assert parse_listing(BALANCED_LISTING) == [
            "google.com/u1",
            "google.com/u2",
            "apple.com/u1",
        ]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", " \n\t\n  "])
    def test_blank_input_yields_nothing(self, text: str) -> None:
        assert parse_listing(text) == []

    def test_header_only_yields_nothing(self) -> None:
        assert parse_listing("Search Terms: nothing\n") == []

    def test_single_root_leaf(self) -> None:
        assert parse_listing("google.com") == ["google.com"]

    def test_single_connected_leaf(self) -> None:
        assert parse_listing("└── google.com\n") == ["google.com"]

    def test_names_with_spaces_and_unicode(self) -> None:
        listing = "├── my bank\n│   └── café login\n└── 日本"
        assert parse_listing(listing) == ["my bank/café login", "日本"]

    def test_no_break_space_connectors(self) -> None:
        listing = "├──\u00a0mail\n│\u00a0\u00a0\u00a0└──\u00a0work\n└──\u00a0web"
        assert parse_listing(listing) == ["mail/work", "web"]

    def test_crlf_line_endings(self) -> None:
        listing = "├── a\r\n│   └── b\r\n└── c\r\n"
        assert parse_listing(listing) == ["a/b", "c"]

    def test_store_root_line_prefixes_every_path(self) -> None:
        listing = "Password Store\n├── email\n│   └── work\n└── bank"
        assert parse_listing(listing) == ["Password Store/email/work", "Password Store/bank"]

    def test_custom_header_prefixes(self) -> None:
        listing = "Password Store\n├── email\n└── bank"
        assert parse_listing(listing, header_prefixes=["Password Store"]) == ["email", "bank"]

    def test_header_with_different_indentation(self) -> None:
        listing = "Search Terms: x\n    ├── a\n    └── b"
        assert parse_listing(listing) == ["a", "b"]


class TestFlattenTree:
    def test_siblings_pop_one(self) -> None:
        assert flatten_tree(["├── a", "├── b", "└── c"]) == ["a", "b", "c"]

    def test_ascending_pops_two(self) -> None:
        lines = ["├── a", "│   └── b", "└── c", "    └── d"]
        assert flatten_tree(lines) == ["a/b", "c/d"]

    def test_ascending_several_levels_still_pops_two(self) -> None:
        # Only adjacent depths are compared; a multi-level jump is not tracked.
        lines = ["├── a", "│   └── b", "│       └── c", "└── d"]
        assert flatten_tree(lines) == ["a/b/c", "a/d"]

    def test_underflow_is_clamped(self) -> None:
        assert flatten_tree(["    x", "y"]) == ["x", "y"]

    def test_underflow_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="ironpass.listing"):
            flatten_tree(["    x", "y"])

        assert any("underflow" in record.getMessage() for record in caplog.records)

    def test_root_level_first_line_is_not_an_underflow(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="ironpass.listing"):
            flatten_tree(["Password Store", "├── a", "└── b"])

        assert not any("underflow" in record.getMessage() for record in caplog.records)

    def test_root_level_lines_without_connectors(self) -> None:
        assert flatten_tree(["a", "b"]) == ["a", "b"]

    def test_empty(self) -> None:
        assert flatten_tree([]) == []


class TestHelpers:
    @pytest.mark.parametrize("ch", [" ", "\t", "\u00a0", "│", "├", "└", "─"])
    def test_markup_characters(self, ch: str) -> None:
        assert is_markup_character(ch)

    @pytest.mark.parametrize("ch", ["a", "/", "-", "|", ""])
    def test_name_characters(self, ch: str) -> None:
        assert not is_markup_character(ch)

    def test_depth_counts_characters_not_bytes(self) -> None:
        assert depth_of("│   └── u1") == 8
        assert depth_of("u1") == 0

    def test_count_leading_spaces_ignores_tabs(self) -> None:
        assert count_leading_spaces("  \tx") == 2

    def test_is_header_line(self) -> None:
        assert is_header_line("Search Terms: google")
        assert is_header_line("    Search Terms: google")
        assert not is_header_line("├── Search Terms: google")

    def test_normalize_margin(self) -> None:
        lines = ["", "    ├── a", "   ", "    │   └── b"]
        assert normalize_margin(lines) == ["├── a", "│   └── b"]

    def test_normalize_margin_noop_without_common_indent(self) -> None:
        lines = ["├── a", "    └── b"]
        assert normalize_margin(lines) == lines
