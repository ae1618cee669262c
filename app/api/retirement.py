import logging
from fastapi import APIRouter

from app.core.config import settings
from app.core.exceptions import ProjectionInputError
from app.models.projection import (
    ProjectionInput,
    ProjectionResponse,
    ScenarioRequest,
    ScenarioResponse
)
from app.services.retirement_projector import RetirementProjector
from app.services.recommendation_engine import RecommendationEngine

logger = logging.getLogger(__name__)

router = APIRouter()


def build_projection_response(inputs: ProjectionInput) -> ProjectionResponse:
    result = RetirementProjector().project(inputs)
    return ProjectionResponse(
        inputs=inputs,
        result=result,
        flags=RecommendationEngine.evaluate_flags(inputs),
        recommendations=RecommendationEngine.generate_recommendations(inputs),
        outlook=RecommendationEngine.describe_outlook(inputs, result)
    )


@router.get("/projection/defaults", response_model=ProjectionInput)
def get_default_inputs():
    """
    Starting values for a fresh calculator form.
    """
    return ProjectionInput(
        currentAge=settings.DEFAULT_CURRENT_AGE,
        retirementAge=settings.DEFAULT_RETIREMENT_AGE,
        lifeExpectancy=settings.DEFAULT_LIFE_EXPECTANCY,
        currentSavings=settings.DEFAULT_CURRENT_SAVINGS,
        annualContribution=settings.DEFAULT_ANNUAL_CONTRIBUTION,
        expectedReturnRate=settings.DEFAULT_EXPECTED_RETURN_RATE,
        inflationRate=settings.DEFAULT_INFLATION_RATE,
        withdrawalRate=settings.DEFAULT_WITHDRAWAL_RATE,
        socialSecurityBenefit=settings.DEFAULT_SOCIAL_SECURITY_BENEFIT,
    )


@router.post("/projection", response_model=ProjectionResponse)
def create_projection(inputs: ProjectionInput):
    """
    Project one set of inputs. Recomputed from scratch on every call.
    """
    return build_projection_response(inputs)


@router.post("/projection/scenarios", response_model=ScenarioResponse)
def compare_scenarios(request: ScenarioRequest):
    """
    Project several scenarios side by side, keeping request order.
    An invalid scenario rejects the whole request.
    """
    responses = []
    for index, scenario in enumerate(request.scenarios):
        try:
            responses.append(build_projection_response(scenario))
        except ProjectionInputError as e:
            # Re-raised with its position so the client can point at the right form
            e.loc_prefix = ("body", "scenarios", index)
            raise

    logger.info(f"Projected {len(responses)} retirement scenarios")
    return ScenarioResponse(scenarios=responses)
