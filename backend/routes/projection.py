import logging

from fastapi import APIRouter, HTTPException

from schemas.pension import (
    EconomicAssumptions,
    PensionData,
    PensionResults,
    ProjectionComparison,
    ProjectionInsights,
    RiskProfile,
)
from services.insights import planning_tip, recommendation
from services.projection import (
    ANNUAL_RETURNS,
    RETURN_BANDS,
    SCENARIO_MULTIPLIERS,
    SCENARIO_PROBABILITIES,
    project,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projection", tags=["projection"])


@router.post("/run", response_model=PensionResults)
async def run_projection(inputs: PensionData) -> PensionResults:
    """
    Run a pension projection.

    Turns an income pattern, ages and economic assumptions into:

    - **projectedCorpus**: Savings reached at retirement
    - **requiredCorpus**: Savings needed to cover inflated retirement expenses
    - **fundingGap**: Shortfall between the two, never negative
    - **projectionData**: Year-by-year balances for charting
    - **scenarios**: Conservative, Expected and Optimistic outcomes

    Rule violations come back in **errorMessage** with zeroed results rather
    than as an HTTP error.
    """
    try:
        return project(inputs)
    except Exception as e:
        logger.exception("Projection failed")
        raise HTTPException(status_code=500, detail=f"Projection failed: {str(e)}")


@router.post("/compare", response_model=ProjectionComparison)
async def compare_projections(
    base: PensionData,
    alternatives: list[PensionData],
) -> ProjectionComparison:
    """
    Compare multiple pension projections.

    Useful for "what-if" analysis like:

    - What if I contribute 20% instead of 15%?
    - What if I move to a high risk profile?
    - What if I retire at 65 instead of 60?
    """
    try:
        return ProjectionComparison(
            base_projection=project(base),
            alternative_projections=[project(alt) for alt in alternatives],
        )
    except Exception as e:
        logger.exception("Comparison failed")
        raise HTTPException(status_code=500, detail=f"Comparison failed: {str(e)}")


@router.post("/insights", response_model=ProjectionInsights)
async def projection_insights(inputs: PensionData) -> ProjectionInsights:
    """
    Run a projection and attach a planning tip and, when there is a funding
    gap, a contribution recommendation.
    """
    results = project(inputs)
    if results.error_message:
        raise HTTPException(status_code=400, detail=results.error_message)

    return ProjectionInsights(
        results=results,
        tip=planning_tip(inputs),
        recommendation=recommendation(results),
    )


@router.get("/risk-profiles")
async def get_risk_profiles() -> dict:
    """
    Get available risk profiles with their return bands and scenario
    multipliers.
    """
    profiles = {}
    for profile, (low, high) in RETURN_BANDS.items():
        conservative, expected, optimistic = SCENARIO_MULTIPLIERS[profile]
        profiles[profile.value] = {
            "name": profile.value.title(),
            "return_band": [low, high],
            "annual_return": ANNUAL_RETURNS[profile],
            "description": _get_profile_description(profile),
            "scenario_multipliers": {
                "conservative": conservative,
                "expected": expected,
                "optimistic": optimistic,
            },
        }

    return {
        "profiles": profiles,
        "scenario_probabilities": list(SCENARIO_PROBABILITIES),
    }


@router.get("/assumptions", response_model=EconomicAssumptions)
async def get_default_assumptions() -> EconomicAssumptions:
    """Get the default economic assumptions used when no override is given."""
    return EconomicAssumptions()


def _get_profile_description(profile: RiskProfile) -> str:
    """Get description for a risk profile."""
    descriptions = {
        RiskProfile.LOW: "Government bonds and fixed deposits. Lower returns with capital preservation.",
        RiskProfile.MEDIUM: "Balanced funds and national pension schemes. A mix of growth and stability.",
        RiskProfile.HIGH: "Equity funds and stocks. Highest growth potential with significant volatility.",
    }
    return descriptions.get(profile, "")
