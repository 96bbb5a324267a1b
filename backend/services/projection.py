import datetime
import logging
import math
import numpy as np
from typing import Optional

from schemas.pension import (
    EconomicAssumptions,
    GigIncomePattern,
    MonthlyIncome,
    PensionData,
    PensionResults,
    ProjectionDataPoint,
    RiskProfile,
    ScenarioLabel,
    ScenarioResult,
    SeasonalIncomePattern,
)
from services.validation import validate_pension_data

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

OVERFLOW_MESSAGE = "projection: inputs are too large to project"

# Published annual return bands per risk profile
RETURN_BANDS = {
    RiskProfile.LOW: (0.06, 0.08),      # Government bonds, fixed deposits
    RiskProfile.MEDIUM: (0.08, 0.12),   # Balanced funds, pension schemes
    RiskProfile.HIGH: (0.12, 0.15),     # Equity funds, stocks
}

# Midpoint of each band
ANNUAL_RETURNS = {
    RiskProfile.LOW: 0.07,
    RiskProfile.MEDIUM: 0.10,
    RiskProfile.HIGH: 0.135,
}

# Conservative / Expected / Optimistic multipliers on the projected corpus
SCENARIO_MULTIPLIERS = {
    RiskProfile.LOW: (0.85, 1.00, 1.15),
    RiskProfile.MEDIUM: (0.90, 1.00, 1.20),
    RiskProfile.HIGH: (0.80, 1.00, 1.30),   # Wider range for higher risk
}

SCENARIO_PROBABILITIES = (30, 50, 20)

SCENARIO_LABELS = (
    ScenarioLabel.CONSERVATIVE,
    ScenarioLabel.EXPECTED,
    ScenarioLabel.OPTIMISTIC,
)


def annuity_due_value(contribution: float, monthly_rate: float, months: int) -> float:
    """
    Closed form of the deposit-then-grow loop after ``months`` deposits.

    Equivalent to repeating ``balance = (balance + contribution) * (1 + r)``.
    """
    if months <= 0:
        return 0.0
    if monthly_rate == 0:
        return contribution * months
    with np.errstate(over="ignore", invalid="ignore"):
        growth = np.power(1 + monthly_rate, months)
        return float(contribution * (1 + monthly_rate) * (growth - 1) / monthly_rate)


class PensionProjectionEngine:
    """
    Deterministic pension projection engine.

    Turns a PensionData record into a yearly accumulation trajectory, the
    corpus needed at retirement, the funding gap, and three named outcome
    scenarios. The engine only holds read-only lookup tables, so one instance
    can serve any number of callers.
    """

    def __init__(
        self,
        annual_returns: Optional[dict] = None,
        scenario_multipliers: Optional[dict] = None,
    ):
        """
        Args:
            annual_returns: Assumed annual return per RiskProfile
            scenario_multipliers: Conservative/Expected/Optimistic factors per RiskProfile
        """
        self.annual_returns = dict(annual_returns or ANNUAL_RETURNS)
        self.scenario_multipliers = dict(scenario_multipliers or SCENARIO_MULTIPLIERS)

    # -- income and rates ---------------------------------------------------

    def normalize_annual_income(self, data: PensionData) -> float:
        """Reduce the active income variant to one annual figure."""
        income = data.income
        match income:
            case MonthlyIncome():
                return (income.monthly_income or 0.0) * MONTHS_PER_YEAR
            case SeasonalIncomePattern() if income.seasonal_incomes:
                return sum(record.amount or 0.0 for record in income.seasonal_incomes)
            case SeasonalIncomePattern():
                seasons = income.seasons_per_year if income.seasons_per_year is not None else 1
                return (income.seasonal_income or 0.0) * seasons
            case GigIncomePattern() if income.gig_incomes:
                return sum(
                    (gig.amount or 0.0) * (gig.frequency_per_year if gig.frequency_per_year is not None else 1)
                    for gig in income.gig_incomes
                )
            case GigIncomePattern():
                gigs = income.gigs_per_year if income.gigs_per_year is not None else 1
                return (income.average_gig_income or 0.0) * gigs
        raise TypeError(f"Unsupported income pattern: {type(income).__name__}")

    def annual_return(self, risk: RiskProfile) -> float:
        return self.annual_returns[risk]

    def monthly_rate(self, risk: RiskProfile) -> float:
        """Monthly rate that compounds to the profile's annual return."""
        return (1 + self.annual_return(risk)) ** (1 / MONTHS_PER_YEAR) - 1

    @staticmethod
    def monthly_contribution(annual_income: float, contribution_percentage: float) -> float:
        return annual_income * contribution_percentage / 100 / MONTHS_PER_YEAR

    # -- accumulation -------------------------------------------------------

    def _simulate_accumulation(
        self,
        data: PensionData,
        years_to_retirement: int,
        contribution: float,
        monthly_rate: float,
        inflation_rate: float,
        current_year: int,
    ) -> list[ProjectionDataPoint]:
        """Run the monthly deposit loop and emit one point per year."""
        total_months = years_to_retirement * MONTHS_PER_YEAR
        balances = []
        months_per_year = []
        balance = 0.0
        elapsed = 0

        for _ in range(years_to_retirement + 1):
            months_this_year = 0
            while months_this_year < MONTHS_PER_YEAR and elapsed < total_months:
                balance = (balance + contribution) * (1 + monthly_rate)
                months_this_year += 1
                elapsed += 1
            balances.append(balance)
            months_per_year.append(months_this_year)

        years = np.arange(years_to_retirement + 1)
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            adjusted = np.asarray(balances) / np.power(1 + inflation_rate, years, dtype=float)

        return [
            ProjectionDataPoint(
                age=data.current_age + year_idx,
                calendar_year=current_year + year_idx,
                annual_contribution=contribution * months,
                nominal_balance=nominal,
                inflation_adjusted_balance=float(real),
            )
            for year_idx, (nominal, months, real) in enumerate(zip(balances, months_per_year, adjusted))
        ]

    # -- requirement and gap ------------------------------------------------

    @staticmethod
    def required_corpus(
        monthly_expenses: float,
        years_to_retirement: int,
        assumptions: EconomicAssumptions,
    ) -> float:
        """Corpus whose withdrawals cover inflated retirement expenses."""
        annual_expenses = monthly_expenses * MONTHS_PER_YEAR * assumptions.post_retirement_expense_ratio
        with np.errstate(over="ignore", invalid="ignore"):
            inflated = annual_expenses * np.power(1 + assumptions.inflation_rate, years_to_retirement)
            return float(inflated / assumptions.withdrawal_rate)

    @staticmethod
    def funding_gap(required: float, projected: float) -> float:
        return max(0.0, required - projected)

    @staticmethod
    def required_monthly_contribution(
        required: float,
        monthly_rate: float,
        years_to_retirement: int,
    ) -> Optional[float]:
        """Monthly deposit that grows to ``required`` over the horizon."""
        months = years_to_retirement * MONTHS_PER_YEAR
        if months == 0:
            return None
        return required / annuity_due_value(1.0, monthly_rate, months)

    # -- scenarios ----------------------------------------------------------

    def generate_scenarios(self, projected: float, risk: RiskProfile) -> list[ScenarioResult]:
        multipliers = self.scenario_multipliers[risk]
        return [
            ScenarioResult(
                label=label,
                final_corpus=projected * multiplier,
                probability_percent=probability,
                risk_profile_echo=risk,
            )
            for label, multiplier, probability in zip(
                SCENARIO_LABELS, multipliers, SCENARIO_PROBABILITIES
            )
        ]

    # -- entrypoint ---------------------------------------------------------

    def project(self, data: PensionData, current_year: Optional[int] = None) -> PensionResults:
        """
        Run a complete pension projection.

        Args:
            data: PensionData describing income, ages and assumptions
            current_year: Calendar year of age ``current_age``, used only to
                label projection points. Defaults to this year.

        Returns:
            PensionResults. Invalid input yields zeroed results with
            ``error_message`` set; this method does not raise for rule
            violations.
        """
        validation = validate_pension_data(data)
        if not validation.is_valid:
            return PensionResults(error_message=validation.message)

        if current_year is None:
            current_year = datetime.date.today().year

        assumptions = data.resolve_assumptions()
        risk = RiskProfile(data.investment_risk)
        years_to_retirement = max(data.retirement_age - data.current_age, 0)

        annual_income = self.normalize_annual_income(data)
        contribution = self.monthly_contribution(annual_income, data.contribution_percentage)
        annual_return = self.annual_return(risk)
        monthly_rate = self.monthly_rate(risk)

        projections = self._simulate_accumulation(
            data,
            years_to_retirement,
            contribution,
            monthly_rate,
            assumptions.inflation_rate,
            current_year,
        )
        projected = projections[-1].nominal_balance

        required = self.required_corpus(data.monthly_expenses, years_to_retirement, assumptions)
        required_contribution = self.required_monthly_contribution(
            required, monthly_rate, years_to_retirement
        )
        values = [projected, required, required_contribution or 0.0]
        values.extend(point.inflation_adjusted_balance for point in projections)
        if not all(math.isfinite(value) for value in values):
            logger.info("Rejected pension data whose projection overflows")
            return PensionResults(error_message=OVERFLOW_MESSAGE)

        gap = self.funding_gap(required, projected)

        if required > 0:
            achievement = projected / required * 100
        else:
            achievement = 100.0 if projected > 0 else 0.0

        logger.debug(
            "Projected %.2f against required %.2f over %d years (%s risk)",
            projected, required, years_to_retirement, risk.value,
        )

        return PensionResults(
            projected_corpus=projected,
            required_corpus=required,
            monthly_contribution=contribution,
            funding_gap=gap,
            years_to_retirement=years_to_retirement,
            projection_data=projections,
            scenarios=self.generate_scenarios(projected, risk),
            annual_income=annual_income,
            annual_return=annual_return,
            surplus=max(0.0, projected - required),
            goal_achievement_percent=achievement,
            required_monthly_contribution=required_contribution,
            assumptions=assumptions,
        )


# Shared instance for use across the application
engine = PensionProjectionEngine()


def project(data: PensionData, current_year: Optional[int] = None) -> PensionResults:
    """Convenience function to run a projection with the default engine."""
    return engine.project(data, current_year)
