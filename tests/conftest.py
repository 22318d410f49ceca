"""Shared pytest fixtures for the REopt client test suite.

Provides:
- anyio_backend: run ``@pytest.mark.anyio`` tests on asyncio only
"""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
