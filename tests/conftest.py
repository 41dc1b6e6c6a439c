from __future__ import annotations

import pytest

from tests._fixtures.pages import FakeFetcher


@pytest.fixture
def fetcher() -> FakeFetcher:
    """Provide an empty fake fetcher; tests register the URLs they need."""
    return FakeFetcher()
