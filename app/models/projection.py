from typing import List, Optional, Dict
from pydantic import BaseModel, ConfigDict, Field

# Projection Models


class ProjectionInput(BaseModel):
    """
    A person's financial trajectory as entered in the retirement calculator.

    Rates are percentages (7 means 7%); `socialSecurityBenefit` is a monthly amount.
    Range checks live in the projector so that callers constructing inputs
    directly get the same labelled errors as API clients.
    """
    model_config = ConfigDict(frozen=True)

    # Age & Timeline
    currentAge: int
    retirementAge: int
    lifeExpectancy: int

    # Balances & Flows
    currentSavings: float
    annualContribution: float

    # Assumptions (percent)
    expectedReturnRate: float
    inflationRate: float
    withdrawalRate: float

    socialSecurityBenefit: float

    def as_fractions(self) -> Dict[str, float]:
        return {
            "returnRate": self.expectedReturnRate / 100,
            "inflation": self.inflationRate / 100,
            "withdrawal": self.withdrawalRate / 100,
        }


class YearlyPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    savings: float


class WithdrawalPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int
    withdrawal: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalSavingsAtRetirement: float
    monthlyIncomeInRetirement: float
    initialAnnualWithdrawal: float
    realReturnRate: float # fraction, not percent

    # None when savings last through lifeExpectancy without reaching zero
    savingsDepletionAge: Optional[int] = None

    savingsByYear: List[YearlyPoint]
    withdrawalsByYear: List[WithdrawalPoint]

    isSuccessful: bool
    shortfall: float
    surplusYears: int


# Recommendation Models

class RecommendationFlags(BaseModel):
    lowContribution: bool
    optimisticReturn: bool
    earlyRetirement: bool
    highWithdrawalRate: bool


class Recommendation(BaseModel):
    id: str
    title: str
    description: str
    category: str
    impact: str # "info" or "warning"


class RetirementOutlook(BaseModel):
    headline: str
    detail: str
    isSuccessful: bool


# Read Models for API Responses

class ProjectionResponse(BaseModel):
    inputs: ProjectionInput
    result: ProjectionResult
    flags: RecommendationFlags
    recommendations: List[Recommendation]
    outlook: RetirementOutlook


class ScenarioRequest(BaseModel):
    scenarios: List[ProjectionInput] = Field(min_length=1, max_length=10)


class ScenarioResponse(BaseModel):
    scenarios: List[ProjectionResponse]
