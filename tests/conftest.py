#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from eyeball.options import InspectOptions


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def plain() -> InspectOptions:
    """Default options without colors."""
    return InspectOptions.plain()


@pytest.fixture
def ansi() -> InspectOptions:
    """Default options, ANSI colored."""
    return InspectOptions()


@pytest.fixture
def buffer() -> io.StringIO:
    """In-memory text stream to inspect into."""
    return io.StringIO()


class Point:
    """A plain user class with public and private instance attributes."""

    def __init__(self, x: int = 1, y: int = 2):
        self.x = x
        self.y = y
        self._tag = "p"

    def norm(self) -> int:
        return abs(self.x) + abs(self.y)


@pytest.fixture
def point() -> Point:
    return Point()
