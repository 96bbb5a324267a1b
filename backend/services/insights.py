from typing import Optional

from schemas.pension import PensionData, PensionResults

EARLY_START_AGE = 30
LOW_CONTRIBUTION_PERCENTAGE = 10


def planning_tip(data: PensionData) -> str:
    """Short planning tip based on age, contribution level and risk profile."""
    if data.current_age < EARLY_START_AGE:
        return (
            "You're starting early, which is a great move. Small, consistent "
            "contributions now can grow significantly through compounding."
        )
    if data.contribution_percentage < LOW_CONTRIBUTION_PERCENTAGE:
        return "Consider increasing your contribution percentage to boost your retirement savings over time."
    return (
        f"Your {data.investment_risk} risk profile balances growth and stability. "
        "Adjust it based on your comfort with market fluctuations."
    )


def recommendation(results: PensionResults) -> Optional[str]:
    """
    Suggest how to close a funding gap.

    Returns None when the projection failed validation or there is no gap.
    """
    if results.error_message or results.funding_gap <= 0:
        return None

    if results.required_monthly_contribution is None:
        return (
            "You have no years left to contribute, so the shortfall cannot be closed "
            "with contributions. Consider retiring later or lowering planned expenses."
        )

    additional = results.required_monthly_contribution - results.monthly_contribution
    return (
        f"Consider increasing your contribution to {results.required_monthly_contribution:,.0f} "
        f"per month ({additional:,.0f} more than today) to meet your retirement goal."
    )
