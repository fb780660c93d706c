"""List parameter expansion.

Rewrites a statement so that every parameter declared with an array type is
bound through one ``?`` per element, e.g. for ``IN (...)`` clauses::

    "SELECT * FROM users WHERE id IN (?)", [[1, 2, 3]], [ParameterType.INTEGER_ARRAY]
    -> "SELECT * FROM users WHERE id IN (?, ?, ?)", [1, 2, 3], [INTEGER, INTEGER, INTEGER]

Named statements always come back positional: each ``:name`` becomes ``?``
and the parameters and types become lists in placeholder order.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from mypy_extensions import mypyc_attr

from sqlexpand.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig
from sqlexpand.exceptions import MissingParameterError, ParameterTypeCountMismatchError, ParameterTypeError
from sqlexpand.locator import PlaceholderLocator
from sqlexpand.types import ExpandedStatement, PlaceholderStyle, get_scalar_type, is_array_type
from sqlexpand.utils.logging import get_logger, log_with_context

__all__ = ("ListParameterExpander", "expand_list_parameters")

logger = get_logger("expander")

_PLACEHOLDER = "?"


@mypyc_attr(allow_interpreted_subclasses=False)
class _ExpansionState:
    """Running growth of the parameter list and the statement text."""

    __slots__ = ("parameter_offset", "query_offset")

    def __init__(self) -> None:
        self.parameter_offset = 0
        self.query_offset = 0


@mypyc_attr(allow_interpreted_subclasses=False)
class ListParameterExpander:
    """Expands array-typed parameters into one placeholder per element."""

    __slots__ = ("config", "locator")

    def __init__(
        self, config: Optional[ExpansionConfig] = None, locator: Optional[PlaceholderLocator] = None
    ) -> None:
        self.config = config or DEFAULT_EXPANSION_CONFIG
        self.locator = locator or PlaceholderLocator()

    def expand(self, sql: str, parameters: Any, types: Any) -> ExpandedStatement:
        """Expand array parameters in a statement.

        The binding style is taken from the parameters: a mapping keyed by ``str``
        is named, a sequence or a mapping keyed by ``int`` is positional.

        Args:
            sql: SQL statement with ``?`` or ``:name`` placeholders
            parameters: Values bound to the placeholders
            types: Declared types, keyed like ``parameters``

        Raises:
            ParameterTypeCountMismatchError: If ``strict_type_count`` is enabled and the
                parameter and type counts differ
            MissingParameterError: If a named placeholder has no value or no type
            ParameterTypeError: If an array type is bound to a non-sequence value

        Returns:
            The rewritten statement with parameters and types aligned to its
            placeholders. Unchanged input is returned as-is.
        """
        if parameters is None or types is None:
            return ExpandedStatement(sql, parameters, types)

        is_positional = _is_positional(parameters)
        array_keys = _array_keys(types, is_positional)

        if len(parameters) != len(types):
            if self.config.strict_type_count:
                raise ParameterTypeCountMismatchError(len(parameters), len(types))
            log_with_context(
                logger,
                logging.DEBUG,
                "Skipping list expansion: %d parameters but %d types",
                len(parameters),
                len(types),
                parameter_count=len(parameters),
                type_count=len(types),
            )
            return ExpandedStatement(sql, parameters, types, is_positional)

        if is_positional:
            if not array_keys:
                return ExpandedStatement(sql, parameters, types, is_positional)
            return self._expand_positional(sql, _values(parameters), _values(types), array_keys)
        return self._expand_named(sql, parameters, types, array_keys)

    def _expand_positional(
        self, sql: str, parameters: list[Any], types: list[Any], array_ordinals: set[Any]
    ) -> ExpandedStatement:
        state = _ExpansionState()

        for ordinal, position in enumerate(self.locator.get_placeholder_positions(sql, PlaceholderStyle.POSITIONAL)):
            if ordinal not in array_ordinals:
                continue

            index = ordinal + state.parameter_offset
            position += state.query_offset
            values = _array_values(parameters[index], ordinal)
            count = len(values)

            parameters[index : index + 1] = values
            types[index : index + 1] = [get_scalar_type(types[index])] * count

            expansion = self._placeholders(count)
            sql = sql[:position] + expansion + sql[position + 1 :]

            state.parameter_offset += count - 1
            state.query_offset += len(expansion) - 1
            log_with_context(
                logger,
                logging.DEBUG,
                "Expanded positional parameter %d into %d values",
                ordinal,
                count,
                parameter=ordinal,
                count=count,
            )

        return ExpandedStatement(sql, parameters, types)

    def _expand_named(
        self, sql: str, parameters: Mapping[str, Any], types: Any, array_names: set[Any]
    ) -> ExpandedStatement:
        state = _ExpansionState()
        ordered_parameters: list[Any] = []
        ordered_types: list[Any] = []

        for position, name in self.locator.get_placeholder_positions(sql, PlaceholderStyle.NAMED).items():
            token_length = len(name) + 1
            value = _lookup(parameters, name, "value")
            type_ = _lookup(types, name, "type")
            position += state.query_offset

            if name not in array_names:
                ordered_parameters.append(value)
                ordered_types.append(type_)
                sql = sql[:position] + _PLACEHOLDER + sql[position + token_length :]
                state.query_offset -= token_length - 1
                continue

            values = _array_values(value, name)
            count = len(values)
            expansion = self._placeholders(count)

            ordered_parameters.extend(values)
            ordered_types.extend([get_scalar_type(type_)] * count)

            sql = sql[:position] + expansion + sql[position + token_length :]
            state.query_offset += len(expansion) - token_length
            log_with_context(
                logger,
                logging.DEBUG,
                "Expanded named parameter %r into %d values",
                name,
                count,
                parameter=name,
                count=count,
            )

        return ExpandedStatement(sql, ordered_parameters, ordered_types)

    def _placeholders(self, count: int) -> str:
        if count == 0:
            # keeps "IN (?)" valid SQL; the driver binds nothing to it
            return _PLACEHOLDER if self.config.empty_array_placeholder else ""
        return self.config.placeholder_separator.join([_PLACEHOLDER] * count)


def _is_positional(parameters: Any) -> bool:
    if isinstance(parameters, Mapping):
        return isinstance(next(iter(parameters), None), int)
    return True


def _values(collection: Any) -> list[Any]:
    if isinstance(collection, Mapping):
        # positional mappings are keyed by ordinal, not insertion order
        return [collection[key] for key in sorted(collection)]
    return list(collection)


def _array_keys(types: Any, is_positional: bool) -> set[Any]:
    if is_positional:
        return {ordinal for ordinal, type_ in enumerate(_values(types)) if is_array_type(type_)}
    if not isinstance(types, Mapping):
        return set()
    return {name for name, type_ in types.items() if is_array_type(type_)}


def _lookup(collection: Any, name: str, kind: str) -> Any:
    if not isinstance(collection, Mapping) or name not in collection:
        msg = f"Missing {kind} for named parameter {name!r}"
        raise MissingParameterError(msg)
    return collection[name]


def _array_values(value: Any, key: Any) -> list[Any]:
    if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
        msg = f"Parameter {key!r} is declared as an array type but is bound to {type(value).__name__}"
        raise ParameterTypeError(msg)
    return list(value)


_default_expander = ListParameterExpander()


def expand_list_parameters(sql: str, parameters: Any, types: Any) -> tuple[str, Any, Any]:
    """Expand array parameters with the default expander.

    Args:
        sql: SQL statement with ``?`` or ``:name`` placeholders
        parameters: Values bound to the placeholders
        types: Declared types, keyed like ``parameters``

    Returns:
        Tuple of (sql, parameters, types)
    """
    expanded = _default_expander.expand(sql, parameters, types)
    return expanded.sql, expanded.parameters, expanded.types
