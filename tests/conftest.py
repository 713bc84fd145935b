#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def lines() -> Callable[..., str]:
    """Fixture to join expected output lines, each terminated by the platform line terminator."""

    def _lines(*items: str) -> str:
        return "".join(f"{item}{os.linesep}" for item in items)

    return _lines
