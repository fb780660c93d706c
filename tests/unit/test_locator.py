"""Tests for placeholder location with literal and escape tracking."""

import pytest

from sqlexpand.locator import PlaceholderLocator, get_placeholder_positions
from sqlexpand.types import PlaceholderInfo, PlaceholderStyle


@pytest.mark.parametrize(
    ("sql", "expected"),
    [
        ("SELECT * FROM users", []),
        ("", []),
        ("a = ? AND b = ?", [4, 14]),
        ("?", [0]),
        ("'?' = ?", [6]),
        ('"?" = ?', [6]),
        ("'\"?' = ?", [7]),
        ('"it\'s ?" = ?', [11]),
        (r"'\'?' = ?", [8]),
        (r"'\\' = ?", [7]),
        (r"'\\\' ? ' = ?", [12]),
        (r"\ '?' = ?", [8]),
        ("'abc ? ", []),
        ("a = ? AND 'x", [4]),
        ("é = ? AND ü = ?", [4, 14]),
        ("a = :name", []),
    ],
    ids=[
        "no_token",
        "empty",
        "two_placeholders",
        "only_placeholder",
        "single_quoted_literal",
        "double_quoted_literal",
        "double_quote_inside_single",
        "single_quote_inside_double",
        "escaped_quote",
        "escaped_backslash",
        "odd_backslash_run",
        "backslash_not_adjacent",
        "unterminated_literal",
        "unterminated_after_placeholder",
        "non_ascii",
        "named_ignored_in_positional_mode",
    ],
)
def test_positional_positions(locator: PlaceholderLocator, sql: str, expected: list[int]) -> None:
    """Test positional placeholders are found outside literals only."""
    assert locator.get_placeholder_positions(sql, PlaceholderStyle.POSITIONAL) == expected


@pytest.mark.parametrize(
    ("sql", "expected"),
    [
        ("SELECT * FROM users", {}),
        ("a = :id AND b = :name", {4: "id", 16: "name"}),
        (":a + :a", {0: "a", 5: "a"}),
        ("a = : AND b = :b", {14: "b"}),
        ("':x' = :y", {7: "y"}),
        ('":x" = :y', {7: "y"}),
        (r"'\':x' = :y", {9: "y"}),
        ("a = :user_id2 + 1", {4: "user_id2"}),
        ("a = ?", {}),
    ],
    ids=[
        "no_token",
        "two_names",
        "duplicate_names",
        "token_without_identifier",
        "single_quoted_literal",
        "double_quoted_literal",
        "escaped_quote",
        "identifier_characters",
        "positional_ignored_in_named_mode",
    ],
)
def test_named_positions(locator: PlaceholderLocator, sql: str, expected: dict[int, str]) -> None:
    """Test named placeholders map offsets to names."""
    assert locator.get_placeholder_positions(sql, PlaceholderStyle.NAMED) == expected


def test_named_positions_keep_statement_order(locator: PlaceholderLocator) -> None:
    positions = locator.get_placeholder_positions(":b, :a, :b", PlaceholderStyle.NAMED)
    assert list(positions.items()) == [(0, "b"), (4, "a"), (8, "b")]


def test_named_identifier_stops_at_non_identifier(locator: PlaceholderLocator) -> None:
    assert locator.get_placeholder_positions("IN (:ids)", PlaceholderStyle.NAMED) == {4: "ids"}
    assert locator.get_placeholder_positions("x = :é", PlaceholderStyle.NAMED) == {}


def test_extract_placeholders(locator: PlaceholderLocator) -> None:
    assert locator.extract_placeholders("a = :id OR b = :id", PlaceholderStyle.NAMED) == [
        PlaceholderInfo("id", PlaceholderStyle.NAMED, 4, 0, ":id"),
        PlaceholderInfo("id", PlaceholderStyle.NAMED, 15, 1, ":id"),
    ]

    positional = locator.extract_placeholders("a = ? AND b = ?")
    assert [p.ordinal for p in positional] == [0, 1]
    assert [p.placeholder_text for p in positional] == ["?", "?"]
    assert all(p.name is None for p in positional)


def test_has_and_count_placeholders(locator: PlaceholderLocator) -> None:
    assert locator.has_placeholders("a = ?")
    assert not locator.has_placeholders("a = '?'")
    assert locator.count_placeholders("a = ? AND b IN (?, ?)") == 3
    assert locator.count_placeholders(":a, ':b', :c", PlaceholderStyle.NAMED) == 2


def test_get_placeholder_names(locator: PlaceholderLocator) -> None:
    assert locator.get_placeholder_names(":a, :b, :a, ':c'") == ["a", "b"]


def test_cached_results_are_not_shared(locator: PlaceholderLocator) -> None:
    """Test mutating a returned result does not leak into later calls."""
    first = locator.get_placeholder_positions("a = ?")
    first.append(99)
    assert locator.get_placeholder_positions("a = ?") == [4]

    named = locator.get_placeholder_positions("a = :a", PlaceholderStyle.NAMED)
    named.clear()
    assert locator.get_placeholder_positions("a = :a", PlaceholderStyle.NAMED) == {4: "a"}


def test_cache_size_limit() -> None:
    locator = PlaceholderLocator(cache_size=1)
    assert locator.get_placeholder_positions("a = ?") == [4]
    assert locator.get_placeholder_positions("b = ?") == [4]
    assert len(locator._cache) == 1

    locator.clear_cache()
    assert not locator._cache


def test_module_level_helper() -> None:
    assert get_placeholder_positions("a = ? AND b = ?") == [4, 14]
    assert get_placeholder_positions("a = :a", is_positional=False) == {4: "a"}
