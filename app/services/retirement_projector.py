import math
import logging
from typing import List, Optional, Tuple

from app.core.config import settings
from app.core.exceptions import ProjectionInputError
from app.models.projection import (
    ProjectionInput,
    ProjectionResult,
    YearlyPoint,
    WithdrawalPoint
)

logger = logging.getLogger(__name__)

MONEY_FIELDS = ("currentSavings", "annualContribution", "socialSecurityBenefit")
RATE_FIELDS = ("expectedReturnRate", "inflationRate", "withdrawalRate")

TOO_LARGE = "is too large to project"


def _require_finite(value: float, field: str) -> float:
    if not math.isfinite(value):
        raise ProjectionInputError(field, TOO_LARGE)
    return value


def _is_depleted(savings: float, net_withdrawal: float) -> bool:
    # An empty balance with nothing drawn from it has not run out
    return savings <= 0 and net_withdrawal > 0


class RetirementProjector:
    """
    Deterministic single-path retirement projection.

    The projection runs in two phases:
    1. Accumulation: nominal growth plus one contribution per year until retirement.
    2. Decumulation: inflation-scaled withdrawals, offset by Social Security,
       against savings growing at the real (Fisher) rate of return.

    Instances hold no state besides the maximum age (which bounds the inputs and
    the surplus search), so one projector can serve any number of concurrent calls.
    """
    def __init__(self, max_age: Optional[int] = None):
        self.max_age = max_age if max_age is not None else settings.MAX_PROJECTION_AGE

    def validate_inputs(self, inputs: ProjectionInput) -> None:
        """
        Rejects inputs that cannot be simulated meaningfully.

        Raises:
            ProjectionInputError: naming the first offending field and the rule it breaks.
        """
        for field in MONEY_FIELDS + RATE_FIELDS:
            value = getattr(inputs, field)
            if not math.isfinite(value):
                raise ProjectionInputError(field, "must be a finite number", value)

        # Ordering
        if inputs.currentAge >= inputs.retirementAge:
            raise ProjectionInputError(
                "currentAge", f"must be less than retirementAge ({inputs.retirementAge})", inputs.currentAge
            )
        if inputs.retirementAge >= inputs.lifeExpectancy:
            raise ProjectionInputError(
                "retirementAge", f"must be less than lifeExpectancy ({inputs.lifeExpectancy})", inputs.retirementAge
            )

        # Magnitude
        if inputs.currentAge < 0:
            raise ProjectionInputError("currentAge", "must be >= 0", inputs.currentAge)
        if inputs.lifeExpectancy > self.max_age:
            raise ProjectionInputError("lifeExpectancy", f"must be <= {self.max_age}", inputs.lifeExpectancy)
        for field in MONEY_FIELDS + RATE_FIELDS:
            value = getattr(inputs, field)
            if value < 0:
                raise ProjectionInputError(field, "must be >= 0", value)

    @staticmethod
    def _accumulation_overflow_field(inputs: ProjectionInput, return_rate: float) -> str:
        years = inputs.retirementAge - inputs.currentAge
        try:
            growth = (1 + return_rate) ** years
        except OverflowError:
            return "expectedReturnRate"
        if not math.isfinite(growth):
            return "expectedReturnRate"
        if not math.isfinite(inputs.currentSavings * growth):
            return "currentSavings"
        return "annualContribution"

    @staticmethod
    def _accumulate(inputs: ProjectionInput, return_rate: float) -> Tuple[float, List[YearlyPoint]]:
        savings = inputs.currentSavings
        savings_by_year = []

        for age in range(inputs.currentAge, inputs.retirementAge):
            savings_by_year.append(YearlyPoint(age=age, savings=savings))
            savings = savings * (1 + return_rate) + inputs.annualContribution

        if not math.isfinite(savings):
            field = RetirementProjector._accumulation_overflow_field(inputs, return_rate)
            raise ProjectionInputError(field, TOO_LARGE)

        savings_by_year.append(YearlyPoint(age=inputs.retirementAge, savings=savings))
        return savings, savings_by_year

    @staticmethod
    def _retirement_year(
        savings: float,
        years_since_retirement: int,
        initial_withdrawal: float,
        monthly_social_security: float,
        inflation: float,
        real_return: float
    ) -> Tuple[float, float]:
        """Returns (net withdrawal, savings at year end) for one retirement year."""
        try:
            inflation_factor = (1 + inflation) ** years_since_retirement
        except OverflowError:
            raise ProjectionInputError("inflationRate", TOO_LARGE)
        _require_finite(inflation_factor, "inflationRate")
        gross_withdrawal = _require_finite(initial_withdrawal * inflation_factor, "withdrawalRate")

        # Social Security offsets the draw but never adds to savings
        annual_social_security = _require_finite(
            monthly_social_security * 12 * inflation_factor, "socialSecurityBenefit"
        )
        net_withdrawal = max(0.0, gross_withdrawal - annual_social_security)

        grown = _require_finite(savings * (1 + real_return), "expectedReturnRate")
        savings = max(0.0, grown - net_withdrawal)
        return net_withdrawal, savings

    def project(self, inputs: ProjectionInput) -> ProjectionResult:
        """
        Runs the full projection for one set of inputs.

        Args:
            inputs (ProjectionInput): ages, balances and percentage assumptions.

        Returns:
            ProjectionResult: summary metrics plus the savings and withdrawal trajectories.

        Raises:
            ProjectionInputError: before any simulation step if the inputs are invalid,
                or as soon as an amount grows beyond what a float can hold.
        """
        try:
            self.validate_inputs(inputs)
            return self._simulate(inputs)
        except ProjectionInputError as e:
            logger.warning(f"Rejected projection input: {e}")
            raise

    def _simulate(self, inputs: ProjectionInput) -> ProjectionResult:
        rates = inputs.as_fractions()
        return_rate = rates["returnRate"]
        inflation = rates["inflation"]

        # 1. Accumulation
        total_at_retirement, savings_by_year = self._accumulate(inputs, return_rate)

        # 2. Decumulation
        # A single Fisher real rate is applied to every retirement year
        real_return = (1 + return_rate) / (1 + inflation) - 1
        initial_withdrawal = _require_finite(total_at_retirement * rates["withdrawal"], "withdrawalRate")
        monthly_income = _require_finite(
            initial_withdrawal / 12 + inputs.socialSecurityBenefit, "socialSecurityBenefit"
        )

        withdrawals_by_year = []
        savings = total_at_retirement
        depletion_age = None

        for age in range(inputs.retirementAge, inputs.lifeExpectancy + 1):
            net_withdrawal, savings = self._retirement_year(
                savings,
                age - inputs.retirementAge,
                initial_withdrawal,
                inputs.socialSecurityBenefit,
                inflation,
                real_return
            )
            withdrawals_by_year.append(WithdrawalPoint(age=age, withdrawal=net_withdrawal))
            savings_by_year.append(YearlyPoint(age=age + 1, savings=savings))

            if depletion_age is None and _is_depleted(savings, net_withdrawal):
                depletion_age = age

        # 3. Derived metrics
        is_successful = depletion_age is None or depletion_age >= inputs.lifeExpectancy
        shortfall = 0.0
        surplus_years = 0

        if not is_successful:
            shortfall = (inputs.lifeExpectancy - depletion_age) * initial_withdrawal
        elif depletion_age is None:
            surplus_years = self._surplus_years(
                inputs, savings, initial_withdrawal, inflation, real_return
            )

        logger.debug(
            f"Projection {inputs.currentAge}->{inputs.retirementAge}->{inputs.lifeExpectancy}: "
            f"retirement savings={total_at_retirement:.2f}, depletion={depletion_age}, "
            f"successful={is_successful}"
        )

        return ProjectionResult(
            totalSavingsAtRetirement=total_at_retirement,
            monthlyIncomeInRetirement=monthly_income,
            initialAnnualWithdrawal=initial_withdrawal,
            realReturnRate=real_return,
            savingsDepletionAge=depletion_age,
            savingsByYear=savings_by_year,
            withdrawalsByYear=withdrawals_by_year,
            isSuccessful=is_successful,
            shortfall=shortfall,
            surplusYears=surplus_years
        )

    def _surplus_years(
        self,
        inputs: ProjectionInput,
        savings: float,
        initial_withdrawal: float,
        inflation: float,
        real_return: float
    ) -> int:
        # Keeps drawing past lifeExpectancy until savings run out or the horizon is hit.
        # Nothing here is recorded in the trajectories.
        if inputs.lifeExpectancy >= self.max_age:
            return 0

        for age in range(inputs.lifeExpectancy + 1, self.max_age + 1):
            net_withdrawal, savings = self._retirement_year(
                savings,
                age - inputs.retirementAge,
                initial_withdrawal,
                inputs.socialSecurityBenefit,
                inflation,
                real_return
            )
            if _is_depleted(savings, net_withdrawal):
                return age - inputs.lifeExpectancy

        return self.max_age - inputs.lifeExpectancy


def project(inputs: ProjectionInput) -> ProjectionResult:
    """Projects `inputs` with the configured horizon."""
    return RetirementProjector().project(inputs)
