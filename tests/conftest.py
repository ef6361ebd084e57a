"""Pytest fixtures for quoting and lead delivery tests."""

from typing import List

import pytest

from src.utils.config_loader import CRMSettings


@pytest.fixture
def valid_lead():
    """A lead that passes every validation rule."""
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane.doe@example.com",
        "phone": "(410) 555-0142",
        "age": 35,
        "zip": "21201",
        "gender": "Female",
        "health_status": "Good",
        "smoker": "No",
        "coverage": 250_000,
        "years": 20,
        "estimated_monthly_premium": "35.20",
        "timestamp": "2026-01-15T10:00:00+00:00",
        "source": "web_quote_tool",
    }


@pytest.fixture
def crm_settings():
    return CRMSettings(
        endpoint="https://crm.example.test/api/leads",
        api_key="secret-token",
        timeout_seconds=2.0,
        retry_attempts=3,
        retry_delay_seconds=0.5,
    )


class RecordingSleep:
    """Stands in for asyncio.sleep so backoff delays are recorded, not waited."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep():
    return RecordingSleep()
