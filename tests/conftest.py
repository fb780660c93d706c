from __future__ import annotations

import pytest

from sqlexpand.expander import ListParameterExpander
from sqlexpand.locator import PlaceholderLocator


@pytest.fixture
def locator() -> PlaceholderLocator:
    return PlaceholderLocator()


@pytest.fixture
def expander() -> ListParameterExpander:
    return ListParameterExpander()
