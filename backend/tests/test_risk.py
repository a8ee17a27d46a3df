"""Tests for risk thresholds and recommendation text."""
import pytest
from pydantic import ValidationError

from backend.core.risk import (
    ConcentrationThresholds,
    RangeThresholds,
    RiskThresholds,
    build_recommendation,
    classify_risk,
)
from backend.core.schema import AttributeType, CategoricalDistribution, NumericDistribution, RiskLevel


def _categorical(top: float) -> CategoricalDistribution:
    return CategoricalDistribution(percentages={"a": top, "b": round(100.0 - top, 1)})


def _ages(low: int, high: int) -> NumericDistribution:
    return NumericDistribution(average=(low + high) / 2, min=low, max=high, range=high - low)


@pytest.mark.parametrize(
    "top,expected",
    [(80.0, RiskLevel.HIGH), (75.1, RiskLevel.HIGH), (75.0, RiskLevel.MEDIUM),
     (60.1, RiskLevel.MEDIUM), (60.0, RiskLevel.LOW), (50.0, RiskLevel.LOW)],
)
def test_gender_bands(top, expected):
    assert classify_risk(AttributeType.GENDER, _categorical(top)) == expected


@pytest.mark.parametrize(
    "top,expected",
    [(70.1, RiskLevel.HIGH), (70.0, RiskLevel.MEDIUM), (50.1, RiskLevel.MEDIUM), (50.0, RiskLevel.LOW)],
)
def test_race_bands(top, expected):
    assert classify_risk(AttributeType.RACE_ETHNICITY, _categorical(top)) == expected


@pytest.mark.parametrize(
    "low,high,expected",
    [(25, 26, RiskLevel.HIGH), (20, 39, RiskLevel.HIGH), (20, 40, RiskLevel.MEDIUM),
     (20, 59, RiskLevel.MEDIUM), (20, 60, RiskLevel.LOW), (18, 75, RiskLevel.LOW)],
)
def test_age_bands_are_inverted(low, high, expected):
    assert classify_risk(AttributeType.AGE, _ages(low, high)) == expected


def test_custom_thresholds():
    thresholds = RiskThresholds(
        gender=ConcentrationThresholds(high=90.0, medium=85.0),
        age=RangeThresholds(high=5, medium=10),
    )
    assert classify_risk(AttributeType.GENDER, _categorical(80.0), thresholds) == RiskLevel.LOW
    assert classify_risk(AttributeType.AGE, _ages(25, 32), thresholds) == RiskLevel.MEDIUM
    # untouched attributes keep their defaults
    assert classify_risk(AttributeType.RACE_ETHNICITY, _categorical(71.0), thresholds) == RiskLevel.HIGH


def test_inverted_thresholds_are_rejected():
    with pytest.raises(ValidationError):
        ConcentrationThresholds(high=50.0, medium=60.0)
    with pytest.raises(ValidationError):
        RangeThresholds(high=40, medium=20)


def test_low_risk_recommendations():
    assert build_recommendation(AttributeType.GENDER, _categorical(50.0), RiskLevel.LOW) == "Distribution is balanced"
    assert build_recommendation(AttributeType.AGE, _ages(18, 75), RiskLevel.LOW) == "Age distribution is diverse"
    assert (
        build_recommendation(AttributeType.RACE_ETHNICITY, _categorical(40.0), RiskLevel.LOW)
        == "Racial distribution is balanced"
    )


def test_gender_recommendation_embeds_distribution():
    dist = CategoricalDistribution(percentages={"male": 80.0, "female": 20.0})
    text = build_recommendation(AttributeType.GENDER, dist, RiskLevel.HIGH)
    assert text == 'Resample to achieve 50/50 balance. Current: {"male":80.0,"female":20.0}'


def test_race_recommendation_embeds_distribution():
    dist = CategoricalDistribution(percentages={"White": 60.0, "Black": 40.0})
    text = build_recommendation(AttributeType.RACE_ETHNICITY, dist, RiskLevel.MEDIUM)
    assert text == 'Increase diversity. Current: {"White":60.0,"Black":40.0}'


def test_age_recommendation_embeds_range():
    text = build_recommendation(AttributeType.AGE, _ages(25, 30), RiskLevel.HIGH)
    assert text == "Expand age range. Current range: 25-30 years"
