"""Advisory flags and outlook messages built on top of a projection."""

from app.services.recommendation_engine import RecommendationEngine, format_currency
from app.services.retirement_projector import project


def test_default_scenario_raises_no_flags(scenario_a):
    flags = RecommendationEngine.evaluate_flags(scenario_a)

    assert flags.model_dump() == {
        "lowContribution": False,
        "optimisticReturn": False,
        "earlyRetirement": False,
        "highWithdrawalRate": False,
    }
    assert RecommendationEngine.generate_recommendations(scenario_a) == []


def test_thresholds_are_strict(make_inputs):
    # Exactly at each threshold: 10% contribution, 8% return, age 65, 4% withdrawal
    inputs = make_inputs(annualContribution=5000, expectedReturnRate=8, retirementAge=65, withdrawalRate=4)
    flags = RecommendationEngine.evaluate_flags(inputs)

    assert not any(flags.model_dump().values())


def test_flags_are_independent(make_inputs):
    flags = RecommendationEngine.evaluate_flags(make_inputs(withdrawalRate=10))

    assert flags.highWithdrawalRate is True
    assert flags.lowContribution is False
    assert flags.optimisticReturn is False
    assert flags.earlyRetirement is False


def test_low_contribution_compares_against_current_savings(make_inputs):
    assert RecommendationEngine.evaluate_flags(make_inputs(annualContribution=4999)).lowContribution
    assert not RecommendationEngine.evaluate_flags(make_inputs(currentSavings=0, annualContribution=0)).lowContribution


def test_all_recommendations_in_fixed_order(make_inputs):
    inputs = make_inputs(annualContribution=1000, expectedReturnRate=9.5, retirementAge=60, withdrawalRate=5)
    recommendations = RecommendationEngine.generate_recommendations(inputs)

    assert [r.id for r in recommendations] == [
        "rec_low_contribution",
        "rec_optimistic_return",
        "rec_early_retirement",
        "rec_high_withdrawal",
    ]
    assert "9.5% may be optimistic" in recommendations[1].description
    assert "Early retirement at 60" in recommendations[2].description
    assert "withdrawal rate of 5%" in recommendations[3].description


def test_outlook_for_successful_plan(scenario_a):
    outlook = RecommendationEngine.describe_outlook(scenario_a, project(scenario_a))

    assert outlook.isSuccessful is True
    assert outlook.headline == "Your savings should last until age 120"
    assert outlook.detail == "That's 30 years beyond your life expectancy!"


def test_outlook_when_savings_last_exactly(make_inputs):
    inputs = make_inputs(withdrawalRate=7, socialSecurityBenefit=0, lifeExpectancy=82)
    outlook = RecommendationEngine.describe_outlook(inputs, project(inputs))

    assert outlook.headline == "Your savings should last until age 82"
    assert outlook.detail == "Your savings should last through your expected lifetime."


def test_outlook_for_failing_plan(make_inputs):
    inputs = make_inputs(withdrawalRate=10, expectedReturnRate=3)
    result = project(inputs)
    outlook = RecommendationEngine.describe_outlook(inputs, result)

    assert outlook.isSuccessful is False
    assert outlook.headline == "Your savings may run out at age 78"
    assert outlook.detail.startswith("That's 12 years before your life expectancy")
    assert format_currency(result.shortfall) in outlook.detail


def test_format_currency():
    assert format_currency(1363250.34) == "$1,363,250"
    assert format_currency(0) == "$0"
    assert format_currency(-1234.6) == "-$1,235"


def test_format_currency_rounds_halves_away_from_zero():
    assert format_currency(2.5) == "$3"
    assert format_currency(0.5) == "$1"
    assert format_currency(-2.5) == "-$3"
    assert format_currency(1363250.5) == "$1,363,251"
