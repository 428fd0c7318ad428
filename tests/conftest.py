from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from tests.helpers import FakeClock

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a clock starting at 0 that only moves when advanced."""
    return FakeClock()


@pytest.fixture
def clocked_sleep(fake_clock: FakeClock) -> Generator[Mock, None, None]:
    """Patch time.sleep so that sleeping advances ``fake_clock``."""
    with patch("time.sleep", side_effect=fake_clock.advance) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing callbacks."""
    return Mock()
