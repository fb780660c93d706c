"""Core placeholder and parameter types.

``ParameterType`` keeps the numeric tag values drivers already use: array tags
sit ``ARRAY_PARAM_OFFSET`` above the scalar tag they expand to. Callers should
rely on ``is_array`` and ``scalar_type`` rather than the arithmetic.
"""

from collections.abc import Iterator
from enum import Enum, IntEnum
from typing import Any, Final, Optional

__all__ = (
    "ARRAY_PARAM_OFFSET",
    "ARRAY_TYPES",
    "ExpandedStatement",
    "ParameterType",
    "PlaceholderInfo",
    "PlaceholderStyle",
    "get_scalar_type",
    "is_array_type",
)

ARRAY_PARAM_OFFSET: Final[int] = 100


class PlaceholderStyle(str, Enum):
    """Placeholder binding style with string values."""

    POSITIONAL = "positional"
    NAMED = "named"

    @property
    def token(self) -> str:
        """The character that starts a placeholder in this style."""
        return "?" if self is PlaceholderStyle.POSITIONAL else ":"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


class ParameterType(IntEnum):
    """Declared type of a bound parameter."""

    NULL = 0
    INTEGER = 1
    STRING = 2
    LARGE_OBJECT = 3
    BOOLEAN = 5
    INTEGER_ARRAY = 1 + ARRAY_PARAM_OFFSET
    STRING_ARRAY = 2 + ARRAY_PARAM_OFFSET

    @property
    def is_array(self) -> bool:
        return self in ARRAY_TYPES

    @property
    def scalar_type(self) -> "ParameterType":
        """The scalar type each element of an array parameter is bound as."""
        if self.is_array:
            return ParameterType(self.value - ARRAY_PARAM_OFFSET)
        return self


ARRAY_TYPES: Final = frozenset({ParameterType.INTEGER_ARRAY, ParameterType.STRING_ARRAY})
_ARRAY_TYPE_VALUES: Final = frozenset(int(t) for t in ARRAY_TYPES)


def is_array_type(type_: Any) -> bool:
    """Check whether a declared type asks for list expansion.

    Plain ints compare equal to their ``ParameterType`` member, so drivers that
    pass raw numeric tags work too. Non-integer tags are never arrays.

    Args:
        type_: A declared parameter type.

    Returns:
        True for the integer-array and string-array tags.
    """
    if not isinstance(type_, int):
        return False
    return int(type_) in _ARRAY_TYPE_VALUES


def get_scalar_type(type_: Any) -> Any:
    """Map an array type to the scalar type of its elements.

    Non-array types are returned unchanged.
    """
    if is_array_type(type_):
        return ParameterType(type_).scalar_type
    return type_


class PlaceholderInfo:
    """Immutable placeholder information."""

    __slots__ = ("name", "ordinal", "placeholder_text", "position", "style")

    def __init__(
        self, name: Optional[str], style: PlaceholderStyle, position: int, ordinal: int, placeholder_text: str
    ) -> None:
        self.name = name
        self.style = style
        self.position = position
        self.ordinal = ordinal
        self.placeholder_text = placeholder_text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.name == other.name and self.style == other.style and self.position == other.position

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join([f'name={self.name!r}', f'ordinal={self.ordinal!r}', f'placeholder_text={self.placeholder_text!r}', f'position={self.position!r}', f'style={self.style!r}'])})"

    def __hash__(self) -> int:
        return hash((self.name, self.style, self.position))


class ExpandedStatement:
    """Result of list parameter expansion.

    Unpacks as ``sql, parameters, types``. After a named expansion the
    parameters and types are positional lists aligned with the ``?`` tokens
    in ``sql``.
    """

    __slots__ = ("is_positional", "parameters", "sql", "types")

    def __init__(self, sql: str, parameters: Any, types: Any, is_positional: bool = True) -> None:
        self.sql = sql
        self.parameters = parameters
        self.types = types
        self.is_positional = is_positional

    def __iter__(self) -> Iterator[Any]:
        return iter((self.sql, self.parameters, self.types))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return (
            self.sql == other.sql
            and self.parameters == other.parameters
            and self.types == other.types
            and self.is_positional == other.is_positional
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join([f'is_positional={self.is_positional!r}', f'parameters={self.parameters!r}', f'sql={self.sql!r}', f'types={self.types!r}'])})"
