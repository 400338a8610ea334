"""Pytest configuration for test isolation.

``db.client`` caches one engine per process and refuses to rebind it to a
different URL, and ``configure_logging`` is a process-wide one-shot. Tests
each bootstrap their own SQLite file and some run the CLI, so both pieces of
global state are reset around every test. ``DATABASE_URL`` is cleared so a
developer's environment can never point tests at a real database.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest
from db.client import dispose_engine

from spend_analytics.logging_setup import reset_logging

# A fixed "today" for engine tests: current month is November 2025.
TODAY = date(2025, 11, 19)


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    dispose_engine()
    yield
    dispose_engine()
    reset_logging()


@pytest.fixture
def today() -> date:
    return TODAY
