import pytest

from schemas.pension import RiskProfile
from services.projection import engine


def test_monthly_income_is_annualized(make_data):
    assert engine.normalize_annual_income(make_data(monthlyIncome=42000)) == 504000


def test_seasonal_records_are_summed(make_data):
    data = make_data(
        incomeType="seasonal",
        seasonalIncomes=[
            {"month": "January", "amount": 100000},
            {"month": "April", "amount": 50000},
            {"month": "August", "amount": 80000},
        ],
    )
    assert engine.normalize_annual_income(data) == 230000


def test_seasonal_records_take_precedence_over_simplified_form(make_data):
    data = make_data(
        incomeType="seasonal",
        seasonalIncomes=[{"month": "December", "amount": 75000}],
        seasonalIncome=10,
        seasonsPerYear=10,
    )
    assert engine.normalize_annual_income(data) == 75000


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"seasonalIncome": 60000, "seasonsPerYear": 4}, 240000),
        ({"seasonalIncome": 60000}, 60000),
        ({"seasonalIncome": 60000, "seasonsPerYear": 0}, 0),
    ],
)
def test_simplified_seasonal_form(make_data, overrides, expected):
    assert engine.normalize_annual_income(make_data(incomeType="seasonal", **overrides)) == expected


def test_gig_records_use_amount_times_frequency(make_data):
    data = make_data(
        incomeType="random",
        gigIncomes=[
            {"id": "delivery", "amount": 5000, "frequencyPerYear": 24},
            {"id": "event", "amount": 12000},
            {"id": "unpaid", "frequencyPerYear": 6},
        ],
    )
    # missing frequency counts once, missing amount counts as zero
    assert engine.normalize_annual_income(data) == 5000 * 24 + 12000


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"averageGigIncome": 2500, "gigsPerYear": 48}, 120000),
        ({"averageGigIncome": 2500}, 2500),
    ],
)
def test_simplified_gig_form(make_data, overrides, expected):
    assert engine.normalize_annual_income(make_data(incomeType="random", **overrides)) == expected


def test_monthly_income_is_ignored_for_other_variants(make_data):
    data = make_data(
        incomeType="random",
        monthlyIncome=1_000_000,
        gigIncomes=[{"amount": 1000, "frequencyPerYear": 12}],
    )
    assert engine.normalize_annual_income(data) == 12000


def test_contribution_and_rates():
    assert engine.monthly_contribution(600000, 15) == pytest.approx(7500)
    assert engine.monthly_contribution(600000, 0) == 0

    for risk, annual in (("low", 0.07), ("medium", 0.10), ("high", 0.135)):
        monthly = engine.monthly_rate(RiskProfile(risk))
        assert (1 + monthly) ** 12 == pytest.approx(1 + annual, rel=1e-12)
        assert monthly < annual / 12
