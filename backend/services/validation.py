"""
Rule validation for pension projection inputs.

Structural problems are caught by pydantic when PensionData is built. The
rules here cover ranges and presence, and are reported as an ordered list of
messages instead of being raised.
"""

import logging
import math
from dataclasses import dataclass, field

from schemas.pension import (
    GigIncomePattern,
    MonthlyIncome,
    PensionData,
    RiskProfile,
    SeasonalIncomePattern,
)

logger = logging.getLogger(__name__)

MINIMUM_AGE = 18
MAXIMUM_AGE = 100
MAXIMUM_INFLATION_RATE = 1.0
RISK_PROFILES = {profile.value for profile in RiskProfile}


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


def _check_finite(result: ValidationResult, path: str, value) -> bool:
    if value is not None and not math.isfinite(value):
        result.errors.append(f"{path}: must be a finite number")
        return False
    return True


def _check_non_negative(result: ValidationResult, path: str, value) -> None:
    if not _check_finite(result, path, value):
        return
    if value is not None and value < 0:
        result.errors.append(f"{path}: must be >= 0")


def _check_seasonal(result: ValidationResult, income: SeasonalIncomePattern) -> None:
    if not income.seasonal_incomes and income.seasonal_income is None:
        result.errors.append("seasonalIncomes: at least one seasonal income is required")
        return
    for idx, record in enumerate(income.seasonal_incomes):
        _check_non_negative(result, f"seasonalIncomes[{idx}].amount", record.amount)
    _check_non_negative(result, "seasonalIncome", income.seasonal_income)
    _check_non_negative(result, "seasonsPerYear", income.seasons_per_year)


def _check_gigs(result: ValidationResult, income: GigIncomePattern) -> None:
    if not income.gig_incomes and income.average_gig_income is None:
        result.errors.append("gigIncomes: at least one gig income is required")
        return
    for idx, gig in enumerate(income.gig_incomes):
        _check_non_negative(result, f"gigIncomes[{idx}].amount", gig.amount)
        _check_non_negative(result, f"gigIncomes[{idx}].frequencyPerYear", gig.frequency_per_year)
    _check_non_negative(result, "averageGigIncome", income.average_gig_income)
    _check_non_negative(result, "gigsPerYear", income.gigs_per_year)


def validate_pension_data(data: PensionData) -> ValidationResult:
    result = ValidationResult()

    if data.current_age < MINIMUM_AGE:
        result.errors.append(f"currentAge: must be at least {MINIMUM_AGE}")
    if data.retirement_age < data.current_age:
        result.errors.append("retirementAge: must be greater than or equal to currentAge")
    if data.retirement_age > MAXIMUM_AGE:
        result.errors.append(f"retirementAge: must be at most {MAXIMUM_AGE}")
    _check_non_negative(result, "monthlyExpenses", data.monthly_expenses)
    percentage = data.contribution_percentage
    if _check_finite(result, "contributionPercentage", percentage) and not 0 <= percentage <= 100:
        result.errors.append("contributionPercentage: must be between 0 and 100")
    if data.investment_risk not in RISK_PROFILES:
        expected = ", ".join(sorted(RISK_PROFILES))
        result.errors.append(
            f"investmentRisk: '{data.investment_risk}' is not valid; expected one of [{expected}]"
        )

    match data.income:
        case MonthlyIncome(monthly_income=None):
            result.errors.append("monthlyIncome: required when incomeType is 'monthly'")
        case MonthlyIncome(monthly_income=amount):
            _check_non_negative(result, "monthlyIncome", amount)
        case SeasonalIncomePattern():
            _check_seasonal(result, data.income)
        case GigIncomePattern():
            _check_gigs(result, data.income)

    # Assumption overrides
    if data.inflation_rate is not None and _check_finite(result, "inflationRate", data.inflation_rate):
        if not -1 < data.inflation_rate <= MAXIMUM_INFLATION_RATE:
            result.errors.append(f"inflationRate: must be greater than -1 and at most {MAXIMUM_INFLATION_RATE:g}")
    if data.withdrawal_rate is not None and _check_finite(result, "withdrawalRate", data.withdrawal_rate):
        if data.withdrawal_rate <= 0:
            result.errors.append("withdrawalRate: must be greater than 0")
    _check_non_negative(result, "postRetirementExpenseRatio", data.post_retirement_expense_ratio)
    _check_finite(result, "salaryGrowthRate", data.salary_growth_rate)

    if not result.is_valid:
        logger.info("Rejected pension data with %d violation(s)", len(result.errors))
    return result
