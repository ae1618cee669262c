from decimal import Decimal, ROUND_HALF_UP
from typing import List
from app.core.config import settings
from app.models.projection import (
    ProjectionInput,
    ProjectionResult,
    RecommendationFlags,
    Recommendation,
    RetirementOutlook
)


def format_currency(amount: float) -> str:
    """Whole US dollars, halves rounded away from zero, e.g. 1363250.5 -> "$1,363,251"."""
    rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def _format_rate(rate: float) -> str:
    # 7.0 -> "7", 2.5 -> "2.5"
    return f"{rate:g}"


class RecommendationEngine:
    @staticmethod
    def evaluate_flags(inputs: ProjectionInput) -> RecommendationFlags:
        """
        Threshold checks on the calculator inputs.

        These never look at the projection result and are independent of each other:
        - Low contribution: yearly contribution below 10% of current savings.
        - Optimistic return: expected return above 8%.
        - Early retirement: retiring before 65.
        - High withdrawal: withdrawal rate above the 4% rule.
        """
        return RecommendationFlags(
            lowContribution=inputs.annualContribution < inputs.currentSavings * settings.MIN_CONTRIBUTION_RATIO,
            optimisticReturn=inputs.expectedReturnRate > settings.OPTIMISTIC_RETURN_RATE,
            earlyRetirement=inputs.retirementAge < settings.FULL_RETIREMENT_AGE,
            highWithdrawalRate=inputs.withdrawalRate > settings.SAFE_WITHDRAWAL_RATE,
        )

    @staticmethod
    def generate_recommendations(inputs: ProjectionInput) -> List[Recommendation]:
        """
        Turns raised flags into advisory messages.

        Returns:
            List[Recommendation]: in a fixed order (contribution, return, retirement age, withdrawal).
        """
        flags = RecommendationEngine.evaluate_flags(inputs)
        recommendations = []

        # 1. Contributions
        if flags.lowContribution:
            recommendations.append(Recommendation(
                id="rec_low_contribution",
                title="Increase Your Contributions",
                description="Consider increasing your annual contributions to at least 10-15% of your income.",
                category="saving",
                impact="info",
            ))

        # 2. Return assumption
        if flags.optimisticReturn:
            recommendations.append(Recommendation(
                id="rec_optimistic_return",
                title="Optimistic Return Assumption",
                description=(
                    f"Your expected return rate of {_format_rate(inputs.expectedReturnRate)}% may be optimistic. "
                    "Consider using a more conservative estimate."
                ),
                category="investing",
                impact="warning",
            ))

        # 3. Retirement age
        if flags.earlyRetirement:
            recommendations.append(Recommendation(
                id="rec_early_retirement",
                title="Early Retirement",
                description=(
                    f"Early retirement at {inputs.retirementAge} requires more savings. "
                    "Consider delaying retirement to increase your savings and Social Security benefits."
                ),
                category="retirement",
                impact="info",
            ))

        # 4. Withdrawal rate
        if flags.highWithdrawalRate:
            recommendations.append(Recommendation(
                id="rec_high_withdrawal",
                title="High Withdrawal Rate",
                description=(
                    f"A withdrawal rate of {_format_rate(inputs.withdrawalRate)}% may deplete your savings too quickly. "
                    "The 4% rule is a common guideline for sustainable withdrawals."
                ),
                category="withdrawal",
                impact="warning",
            ))

        return recommendations

    @staticmethod
    def describe_outlook(inputs: ProjectionInput, result: ProjectionResult) -> RetirementOutlook:
        if result.isSuccessful:
            last_age = inputs.lifeExpectancy + result.surplusYears
            headline = f"Your savings should last until age {last_age}"
            if result.surplusYears > 0:
                detail = f"That's {result.surplusYears} years beyond your life expectancy!"
            else:
                detail = "Your savings should last through your expected lifetime."
        else:
            years_short = inputs.lifeExpectancy - result.savingsDepletionAge
            headline = f"Your savings may run out at age {result.savingsDepletionAge}"
            detail = (
                f"That's {years_short} years before your life expectancy, "
                f"an estimated shortfall of {format_currency(result.shortfall)}. "
                "Consider increasing your savings rate, delaying retirement, or adjusting your withdrawal rate."
            )

        return RetirementOutlook(headline=headline, detail=detail, isSuccessful=result.isSuccessful)
