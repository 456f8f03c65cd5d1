"""
Shared fixtures.

Every test gets a fresh in‑memory record store and a fresh timer state
store so that state never leaks between tests.
"""

import pytest

from business_dashboard_api.app.core.record_store import InMemoryRecordStore, set_record_store
from business_dashboard_api.app.services.time_tracking_service import (
    InMemoryTimerStateStore,
    set_timer_state_store,
)


@pytest.fixture(autouse=True)
def record_store():
    store = InMemoryRecordStore()
    set_record_store(store)
    yield store
    set_record_store(None)


@pytest.fixture(autouse=True)
def timer_store():
    store = InMemoryTimerStateStore()
    set_timer_state_store(store)
    yield store
    set_timer_state_store(None)
