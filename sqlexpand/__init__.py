"""SQL placeholder location and list parameter expansion.

Prepares a statement for a driver that binds ``?`` placeholders one value at a
time: array-typed parameters are expanded into one placeholder per element and
named placeholders are rewritten as positional ones.
"""

from sqlexpand import exceptions
from sqlexpand.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig
from sqlexpand.expander import ListParameterExpander, expand_list_parameters
from sqlexpand.locator import PlaceholderLocator, get_placeholder_positions
from sqlexpand.types import (
    ARRAY_PARAM_OFFSET,
    ExpandedStatement,
    ParameterType,
    PlaceholderInfo,
    PlaceholderStyle,
    get_scalar_type,
    is_array_type,
)

__all__ = (
    "ARRAY_PARAM_OFFSET",
    "DEFAULT_EXPANSION_CONFIG",
    "ExpandedStatement",
    "ExpansionConfig",
    "ListParameterExpander",
    "ParameterType",
    "PlaceholderInfo",
    "PlaceholderLocator",
    "PlaceholderStyle",
    "exceptions",
    "expand_list_parameters",
    "get_placeholder_positions",
    "get_scalar_type",
    "is_array_type",
)
