import pytest

from nextstep.config import settings
from nextstep.schemas.nextstep import NextStepContext


@pytest.fixture
def empty_context() -> NextStepContext:
    """a budget with nothing to act on"""
    return NextStepContext()


@pytest.fixture
def busy_context() -> NextStepContext:
    """a budget where every trigger condition holds at once"""
    return NextStepContext(
        left_to_budget=-150.5,
        uncategorized_count=3,
        overspent_label="Dining Out",
        overspent_amount=-42.25,
        debt_min_missing_count=2,
    )


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """pin the settings the handler falls back to, whatever the local .env says"""
    monkeypatch.setattr(settings, "default_tone", "guided")
    monkeypatch.setattr(settings, "encouragement", True)
    monkeypatch.setattr(settings, "log_level", "INFO")
    monkeypatch.setattr(settings, "log_pretty", False)
