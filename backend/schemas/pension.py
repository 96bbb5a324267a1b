from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel, to_snake
from typing import Annotated, Any, Literal, Optional, Union
from enum import Enum


class RiskProfile(str, Enum):
    LOW = "low"          # 6-8% annual return band
    MEDIUM = "medium"    # 8-12% annual return band
    HIGH = "high"        # 12-15% annual return band


class IncomeType(str, Enum):
    MONTHLY = "monthly"
    SEASONAL = "seasonal"
    RANDOM = "random"


class ScenarioLabel(str, Enum):
    CONSERVATIVE = "Conservative"
    EXPECTED = "Expected"
    OPTIMISTIC = "Optimistic"


Month = Literal[
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SeasonalIncome(CamelModel):
    """Income earned in one period of a seasonal year"""
    month: Month
    amount: Optional[float] = Field(default=None, description="Amount earned in the period")


class GigIncome(CamelModel):
    """A recurring gig and how often it pays per year"""
    id: Optional[str] = None
    amount: Optional[float] = Field(default=None, description="Payout per gig")
    frequency_per_year: Optional[float] = Field(default=None, description="Gigs of this kind per year")


class MonthlyIncome(CamelModel):
    income_type: Literal["monthly"] = "monthly"
    monthly_income: Optional[float] = Field(default=None, description="Stable monthly income")


class SeasonalIncomePattern(CamelModel):
    income_type: Literal["seasonal"] = "seasonal"
    seasonal_incomes: list[SeasonalIncome] = Field(default_factory=list)

    # Simplified form, used only when no per-period records are given
    seasonal_income: Optional[float] = Field(default=None, description="Income per season")
    seasons_per_year: Optional[float] = Field(default=None, description="Number of earning seasons per year")


class GigIncomePattern(CamelModel):
    income_type: Literal["random"] = "random"
    gig_incomes: list[GigIncome] = Field(default_factory=list)

    # Simplified form, used only when no gig records are given
    average_gig_income: Optional[float] = Field(default=None, description="Average payout per gig")
    gigs_per_year: Optional[float] = Field(default=None, description="Number of gigs per year")


IncomePattern = Annotated[
    Union[MonthlyIncome, SeasonalIncomePattern, GigIncomePattern],
    Field(discriminator="income_type"),
]

# Keys each variant may read from a flat payload
_VARIANT_FIELDS = {
    IncomeType.MONTHLY.value: ("monthly_income",),
    IncomeType.SEASONAL.value: ("seasonal_incomes", "seasonal_income", "seasons_per_year"),
    IncomeType.RANDOM.value: ("gig_incomes", "average_gig_income", "gigs_per_year"),
}
_ALL_VARIANT_FIELDS = {name for names in _VARIANT_FIELDS.values() for name in names}


class EconomicAssumptions(FrozenCamelModel):
    """Economic assumptions with their documented defaults"""
    inflation_rate: float = Field(default=0.055, description="Annual inflation rate")
    withdrawal_rate: float = Field(default=0.04, description="Share of corpus drawn per retirement year")
    post_retirement_expense_ratio: float = Field(default=0.8, description="Retirement spending relative to today")
    life_expectancy: int = Field(default=75, description="Planning horizon end age (informational)")
    salary_growth_rate: float = Field(default=0.03, description="Annual salary growth (informational)")


class PensionData(CamelModel):
    """
    Input for a pension projection.

    Range rules (ages, percentages, non-negative amounts) are not pydantic
    constraints. They are checked by services.validation and reported back
    in PensionResults.error_message.

    Accepts either the tagged form (``income: {"incomeType": ...}``) or the flat
    form where ``incomeType`` sits next to the variant fields.
    """

    # Personal info
    current_age: int = Field(..., description="Current age in years")
    retirement_age: int = Field(..., description="Target retirement age")

    # Financial inputs
    income: IncomePattern
    monthly_expenses: float = Field(..., description="Current monthly living expenses")
    contribution_percentage: float = Field(..., description="Share of income contributed, 0-100")

    # Risk
    investment_risk: str = Field(default=RiskProfile.MEDIUM.value, description="low, medium or high")

    # Economic-assumption overrides; None means "use the default"
    inflation_rate: Optional[float] = None
    withdrawal_rate: Optional[float] = None
    post_retirement_expense_ratio: Optional[float] = None
    life_expectancy: Optional[int] = None
    salary_growth_rate: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _nest_income_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "income" in data:
            return data

        income_type = data.get("incomeType", data.get("income_type"))
        if income_type is None:
            return data
        if isinstance(income_type, Enum):
            income_type = income_type.value

        selected = _VARIANT_FIELDS.get(income_type, ())
        nested: dict[str, Any] = {"incomeType": income_type}
        remaining: dict[str, Any] = {}
        for key, value in data.items():
            field_name = to_snake(key)
            if field_name == "income_type":
                continue
            if field_name in selected:
                nested[field_name] = value
            elif field_name not in _ALL_VARIANT_FIELDS:
                remaining[key] = value
        remaining["income"] = nested
        return remaining

    @property
    def income_type(self) -> IncomeType:
        return IncomeType(self.income.income_type)

    def resolve_assumptions(self) -> EconomicAssumptions:
        """Merge overrides onto the defaults."""
        overrides = {
            name: getattr(self, name)
            for name in EconomicAssumptions.model_fields
            if getattr(self, name) is not None
        }
        return EconomicAssumptions(**overrides)


class ProjectionDataPoint(FrozenCamelModel):
    """Balance reached at the end of one projection year"""
    age: int
    calendar_year: int
    annual_contribution: float
    nominal_balance: float
    inflation_adjusted_balance: float = Field(..., description="Balance in today's money")


class ScenarioResult(FrozenCamelModel):
    """One named outcome derived from the projected corpus"""
    label: ScenarioLabel
    final_corpus: float
    probability_percent: float = Field(..., ge=0, le=100)
    risk_profile_echo: RiskProfile


class PensionResults(FrozenCamelModel):
    """Complete projection results"""

    # Core metrics
    projected_corpus: float = 0.0
    required_corpus: float = 0.0
    monthly_contribution: float = 0.0
    funding_gap: float = 0.0
    years_to_retirement: int = 0

    # Year-by-year projection for charting
    projection_data: tuple[ProjectionDataPoint, ...] = ()
    scenarios: tuple[ScenarioResult, ...] = ()

    # Derived metrics
    annual_income: float = 0.0
    annual_return: float = 0.0
    surplus: float = 0.0
    goal_achievement_percent: float = 0.0
    required_monthly_contribution: Optional[float] = Field(
        default=None, description="Monthly deposit that would reach the required corpus"
    )
    assumptions: Optional[EconomicAssumptions] = None

    error_message: Optional[str] = None


class ProjectionComparison(CamelModel):
    """Compare multiple projections"""
    base_projection: PensionResults
    alternative_projections: list[PensionResults]


class ProjectionInsights(CamelModel):
    results: PensionResults
    tip: str
    recommendation: Optional[str] = None
