"""
Pytest configuration and shared fixtures for gw2palette tests.
"""

from __future__ import annotations

import pytest

from gw2palette.config import PaletteMapperSettings
from gw2palette.services import Gw2ApiClient, PaletteMapper
from tests.helpers import FakeClock, FakeSession


@pytest.fixture
def fake_session() -> FakeSession:
    """Create an empty fake HTTP session."""
    return FakeSession()


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def settings() -> PaletteMapperSettings:
    """Default settings with a short timeout so timeout tests stay fast."""
    return PaletteMapperSettings(timeout=200)


@pytest.fixture
def client(settings: PaletteMapperSettings, fake_session: FakeSession) -> Gw2ApiClient:
    """Create a GW2 API client backed by the fake session."""
    return Gw2ApiClient(settings, session=fake_session)  # type: ignore[arg-type]


@pytest.fixture
def mapper(
    settings: PaletteMapperSettings,
    client: Gw2ApiClient,
    clock: FakeClock,
) -> PaletteMapper:
    """Create a palette mapper using the fake session and clock."""
    return PaletteMapper(settings, client=client, clock=clock)
