import pytest
from pydantic import ValidationError

from schemas.pension import (
    EconomicAssumptions,
    GigIncomePattern,
    IncomeType,
    MonthlyIncome,
    PensionData,
    PensionResults,
    SeasonalIncomePattern,
)


def test_flat_payload_is_nested_by_income_type(monthly_payload):
    data = PensionData.model_validate(monthly_payload)
    assert isinstance(data.income, MonthlyIncome)
    assert data.income_type is IncomeType.MONTHLY
    assert data.income.monthly_income == 50000


def test_flat_payload_drops_fields_of_other_variants(monthly_payload):
    monthly_payload.update({
        "incomeType": "random",
        "gigIncomes": [{"id": "g1", "amount": 4000, "frequencyPerYear": 10}],
        "seasonalIncome": 99999,
    })
    data = PensionData.model_validate(monthly_payload)

    assert isinstance(data.income, GigIncomePattern)
    assert not hasattr(data.income, "monthly_income")
    assert not hasattr(data.income, "seasonal_income")
    assert "monthlyIncome" not in data.model_dump(by_alias=True)["income"]


def test_tagged_payload_is_accepted():
    data = PensionData.model_validate({
        "currentAge": 35,
        "retirementAge": 60,
        "monthlyExpenses": 20000,
        "contributionPercentage": 10,
        "investmentRisk": "low",
        "income": {
            "incomeType": "seasonal",
            "seasonalIncomes": [{"month": "March", "amount": 120000}],
        },
    })
    assert isinstance(data.income, SeasonalIncomePattern)
    assert data.income.seasonal_incomes[0].amount == 120000


def test_snake_case_keywords_are_accepted():
    data = PensionData(
        current_age=40,
        retirement_age=65,
        monthly_expenses=1000,
        contribution_percentage=5,
        income_type="monthly",
        monthly_income=3000,
    )
    assert data.income.monthly_income == 3000
    assert data.investment_risk == "medium"


def test_unknown_income_type_is_structural_error(monthly_payload):
    monthly_payload["incomeType"] = "lottery"
    with pytest.raises(ValidationError):
        PensionData.model_validate(monthly_payload)


def test_unknown_month_is_structural_error(monthly_payload):
    monthly_payload.update({
        "incomeType": "seasonal",
        "seasonalIncomes": [{"month": "Smarch", "amount": 1}],
    })
    with pytest.raises(ValidationError):
        PensionData.model_validate(monthly_payload)


def test_assumptions_fall_back_to_defaults(make_data):
    assumptions = make_data().resolve_assumptions()
    assert assumptions == EconomicAssumptions()
    assert assumptions.inflation_rate == 0.055
    assert assumptions.withdrawal_rate == 0.04
    assert assumptions.post_retirement_expense_ratio == 0.8
    assert assumptions.life_expectancy == 75
    assert assumptions.salary_growth_rate == 0.03


def test_assumption_overrides_are_merged(make_data):
    assumptions = make_data(inflationRate=0.03, withdrawalRate=0.05).resolve_assumptions()
    assert assumptions.inflation_rate == 0.03
    assert assumptions.withdrawal_rate == 0.05
    assert assumptions.post_retirement_expense_ratio == 0.8


def test_results_serialize_with_camel_case_keys():
    dumped = PensionResults(error_message="bad").model_dump(by_alias=True)
    assert dumped["errorMessage"] == "bad"
    assert dumped["projectedCorpus"] == 0.0
    assert dumped["projectionData"] == ()


def test_results_are_frozen():
    results = PensionResults()
    with pytest.raises(ValidationError):
        results.projected_corpus = 1.0
