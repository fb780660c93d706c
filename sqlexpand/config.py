"""Expansion configuration."""

from typing import Any, Final

__all__ = ("DEFAULT_EXPANSION_CONFIG", "ExpansionConfig")


class ExpansionConfig:
    """Declarative configuration for list parameter expansion."""

    __slots__ = ("empty_array_placeholder", "placeholder_separator", "strict_type_count")

    def __init__(
        self,
        strict_type_count: bool = False,
        placeholder_separator: str = ", ",
        empty_array_placeholder: bool = True,
    ) -> None:
        """Initialize expansion configuration.

        Args:
            strict_type_count: Raise ``ParameterTypeCountMismatchError`` when the parameter
                and type collections differ in length instead of returning the input unchanged
            placeholder_separator: Text placed between the ``?`` tokens of an expanded array
            empty_array_placeholder: Whether an empty array still reserves a single ``?``.
                When disabled the placeholder is removed from the statement entirely
        """
        self.strict_type_count = strict_type_count
        self.placeholder_separator = placeholder_separator
        self.empty_array_placeholder = empty_array_placeholder

    def replace(self, **changes: Any) -> "ExpansionConfig":
        """Return a copy with the given attributes changed."""
        values = {name: getattr(self, name) for name in self.__slots__}
        unknown = set(changes) - set(values)
        if unknown:
            msg = f"Unknown expansion config options: {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        values.update(changes)
        return ExpansionConfig(**values)

    def hash(self) -> int:
        """Generate hash for cache key generation."""
        return hash((self.strict_type_count, self.placeholder_separator, self.empty_array_placeholder))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return (
            self.strict_type_count == other.strict_type_count
            and self.placeholder_separator == other.placeholder_separator
            and self.empty_array_placeholder == other.empty_array_placeholder
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join([f'empty_array_placeholder={self.empty_array_placeholder!r}', f'placeholder_separator={self.placeholder_separator!r}', f'strict_type_count={self.strict_type_count!r}'])})"


DEFAULT_EXPANSION_CONFIG: Final = ExpansionConfig()
