from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.projection import ProjectionInput


def _scenario_a_payload() -> dict:
    return {
        "currentAge": 30,
        "retirementAge": 65,
        "lifeExpectancy": 90,
        "currentSavings": 50000,
        "annualContribution": 6000,
        "expectedReturnRate": 7,
        "inflationRate": 2.5,
        "withdrawalRate": 4,
        "socialSecurityBenefit": 1500,
    }


@pytest.fixture
def scenario_payload() -> dict:
    return _scenario_a_payload()


@pytest.fixture
def make_inputs():
    """Builds a ProjectionInput from scenario A with the given fields replaced."""

    def _make(**overrides) -> ProjectionInput:
        payload = _scenario_a_payload()
        payload.update(overrides)
        return ProjectionInput(**payload)

    return _make


@pytest.fixture
def scenario_a(make_inputs) -> ProjectionInput:
    return make_inputs()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
