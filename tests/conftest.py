import pytest

from erc20_permit.token.clock import FixedClock

from test_mocks import MOCK_NOW, create_mock_settings, create_mock_token


@pytest.fixture
def settings():
    """Provide settings for the mock token."""
    return create_mock_settings()


@pytest.fixture
def token(settings):
    """Provide a permit token whose clock reads ``MOCK_NOW``."""
    return create_mock_token(settings)


@pytest.fixture
def clock(token) -> FixedClock:
    return token.clock
