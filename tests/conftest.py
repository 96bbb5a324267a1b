import copy

import pytest

from schemas.pension import PensionData

PROJECTION_YEAR = 2025


@pytest.fixture
def monthly_payload() -> dict:
    return {
        "incomeType": "monthly",
        "monthlyIncome": 50000,
        "seasonalIncomes": [],
        "currentAge": 30,
        "retirementAge": 60,
        "monthlyExpenses": 30000,
        "investmentRisk": "medium",
        "contributionPercentage": 15,
    }


@pytest.fixture
def make_data(monthly_payload):
    def _make(**overrides) -> PensionData:
        payload = copy.deepcopy(monthly_payload)
        payload.update(overrides)
        return PensionData.model_validate(payload)

    return _make
