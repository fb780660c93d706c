"""Placeholder location in raw SQL text.

Scans a statement for ``?`` or ``:name`` placeholders while skipping anything
inside single- or double-quoted literals. A quote preceded by an odd run of
backslashes is escaped and does not open or close a literal.

Positions are ``str`` indices. The expander slices statements with the same
indices, so multi-byte characters never shift a splice.
"""

import re
from typing import Final, Optional, Union, overload

from mypy_extensions import mypyc_attr
from typing_extensions import Literal

from sqlexpand.types import PlaceholderInfo, PlaceholderStyle

__all__ = ("PlaceholderLocator", "get_placeholder_positions")

_QUOTES: Final = frozenset({"'", '"'})
_BACKSLASH: Final = "\\"
_SYMBOL_REGEXES: Final = {
    PlaceholderStyle.POSITIONAL: re.compile(r"""['"\\?]"""),
    PlaceholderStyle.NAMED: re.compile(r"""['"\\:]"""),
}
_IDENTIFIER_REGEX: Final = re.compile(r"[A-Za-z0-9_]+")

_Located = tuple[tuple[int, Optional[str]], ...]


@mypyc_attr(allow_interpreted_subclasses=False)
class _ScanState:
    """Literal and escape tracking for a single scan."""

    __slots__ = ("backslash_count", "backslash_position", "in_literal", "quote")

    def __init__(self) -> None:
        # a valid statement never starts inside a literal
        self.in_literal = False
        self.quote = ""
        self.backslash_count = 0
        self.backslash_position = -1

    def is_escaped(self, position: int) -> bool:
        """Whether the character at ``position`` follows an odd run of backslashes."""
        return self.backslash_position == position - 1 and self.backslash_count % 2 == 1

    def push_backslash(self, position: int) -> None:
        if self.backslash_count > 0 and self.backslash_position == position - 1:
            self.backslash_count += 1
        else:
            self.backslash_count = 1
        self.backslash_position = position

    def toggle_quote(self, quote: str) -> None:
        if not self.in_literal:
            self.quote = quote
            self.in_literal = True
        elif quote == self.quote:
            self.in_literal = False
        self.backslash_count = 0


@mypyc_attr(allow_interpreted_subclasses=False)
class PlaceholderLocator:
    """Finds unquoted, unescaped placeholders in SQL statements."""

    __slots__ = ("_cache", "_cache_size")

    DEFAULT_CACHE_SIZE: Final[int] = 1000

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        self._cache: dict[tuple[str, PlaceholderStyle], _Located] = {}
        self._cache_size = cache_size

    @overload
    def get_placeholder_positions(self, sql: str, style: Literal[PlaceholderStyle.POSITIONAL]) -> list[int]: ...

    @overload
    def get_placeholder_positions(self, sql: str, style: Literal[PlaceholderStyle.NAMED]) -> dict[int, str]: ...

    @overload
    def get_placeholder_positions(
        self, sql: str, style: PlaceholderStyle = ...
    ) -> Union[list[int], dict[int, str]]: ...

    def get_placeholder_positions(
        self, sql: str, style: PlaceholderStyle = PlaceholderStyle.POSITIONAL
    ) -> Union[list[int], dict[int, str]]:
        """Get the positions of the placeholders in a statement.

        Args:
            sql: SQL statement to scan
            style: Which placeholder token to look for

        Returns:
            For positional statements a list of offsets, where the list index is the
            placeholder ordinal. For named statements a dict of offset to name in
            statement order; names may repeat.
        """
        located = self._locate(sql, style)
        if style is PlaceholderStyle.POSITIONAL:
            return [position for position, _ in located]
        return {position: name for position, name in located if name is not None}

    def extract_placeholders(
        self, sql: str, style: PlaceholderStyle = PlaceholderStyle.POSITIONAL
    ) -> list[PlaceholderInfo]:
        """Extract placeholder information from a statement.

        Args:
            sql: SQL statement to scan
            style: Which placeholder token to look for

        Returns:
            List of PlaceholderInfo objects, sorted by position
        """
        token = style.token
        return [
            PlaceholderInfo(
                name=name,
                style=style,
                position=position,
                ordinal=ordinal,
                placeholder_text=token if name is None else f"{token}{name}",
            )
            for ordinal, (position, name) in enumerate(self._locate(sql, style))
        ]

    def has_placeholders(self, sql: str, style: PlaceholderStyle = PlaceholderStyle.POSITIONAL) -> bool:
        return bool(self._locate(sql, style))

    def count_placeholders(self, sql: str, style: PlaceholderStyle = PlaceholderStyle.POSITIONAL) -> int:
        return len(self._locate(sql, style))

    def get_placeholder_names(self, sql: str) -> list[str]:
        """Distinct named placeholder names in order of first appearance."""
        names = (name for _, name in self._locate(sql, PlaceholderStyle.NAMED) if name is not None)
        return list(dict.fromkeys(names))

    def clear_cache(self) -> None:
        self._cache.clear()

    def _locate(self, sql: str, style: PlaceholderStyle) -> _Located:
        key = (sql, style)
        if key in self._cache:
            return self._cache[key]

        located = self._scan(sql, style)
        if len(self._cache) < self._cache_size:
            self._cache[key] = located
        return located

    @staticmethod
    def _scan(sql: str, style: PlaceholderStyle) -> _Located:
        token = style.token
        if token not in sql:
            return ()

        state = _ScanState()
        located: list[tuple[int, Optional[str]]] = []

        for match in _SYMBOL_REGEXES[style].finditer(sql):
            symbol = match.group()
            position = match.start()

            if symbol == token and not state.in_literal:
                if style is PlaceholderStyle.POSITIONAL:
                    located.append((position, None))
                    continue
                identifier = _IDENTIFIER_REGEX.match(sql, position + 1)
                if identifier is not None:
                    located.append((position, identifier.group()))
            elif symbol in _QUOTES and not state.is_escaped(position):
                state.toggle_quote(symbol)
            elif symbol == _BACKSLASH:
                state.push_backslash(position)
            else:
                state.backslash_count = 0

        return tuple(located)


_default_locator = PlaceholderLocator()


def get_placeholder_positions(sql: str, is_positional: bool = True) -> Union[list[int], dict[int, str]]:
    """Locate placeholders with the shared default locator.

    Args:
        sql: SQL statement to scan
        is_positional: Look for ``?`` when True, ``:name`` when False

    Returns:
        Offsets for positional statements, offset to name for named statements.
    """
    style = PlaceholderStyle.POSITIONAL if is_positional else PlaceholderStyle.NAMED
    return _default_locator.get_placeholder_positions(sql, style)
