from .projection import (
    ProjectionInput,
    ProjectionResult,
    YearlyPoint,
    WithdrawalPoint
)
from .projection import RecommendationFlags, Recommendation, RetirementOutlook
from .projection import ProjectionResponse, ScenarioRequest, ScenarioResponse
