"""
Pytest configuration and fixtures for Brand Savings tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment before importing brand_savings modules
os.environ["APP_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key-not-real")

from brand_savings.config import get_settings
from intake.controller import IntakeController


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Fresh settings for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.insert.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def record_store():
    """Record store whose write() succeeds unless told otherwise."""
    store = MagicMock()
    store.write = AsyncMock(return_value=None)
    return store


@pytest.fixture
def webhook():
    """Webhook sink whose notify() succeeds unless told otherwise."""
    sink = MagicMock()
    sink.notify = AsyncMock(return_value=None)
    return sink


@pytest.fixture
def controller(record_store, webhook):
    return IntakeController(record_store=record_store, webhook=webhook)


@pytest.fixture
def revealed_controller(controller):
    """Controller with all questions answered and valid contact details."""
    controller.set_spend(30000)
    controller.answer("smart_bidding", "yes")
    controller.answer("performance_target", "yes")
    controller.answer("brand_cpc", "no")
    controller.answer("impression_share", "yes")
    controller.answer("match_type", "yes")
    controller.update_contact(name="Dana Reyes", email="dana@example.com")
    return controller
