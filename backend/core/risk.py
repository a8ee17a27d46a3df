"""Risk tiers and recommendation text for attribute distributions.

Categorical attributes are scored on their most common category: the more
concentrated, the riskier. Age is scored on the spread of the sample, so the
sense is inverted: a narrow range is high risk.
"""
import json

from pydantic import BaseModel, model_validator

from .schema import (
    AttributeType,
    CategoricalDistribution,
    Distribution,
    NumericDistribution,
    RiskLevel,
)


class ConcentrationThresholds(BaseModel):
    """Max category percentage above ``high`` is High, above ``medium`` Medium."""

    high: float
    medium: float

    @model_validator(mode="after")
    def _check_order(self) -> "ConcentrationThresholds":
        if self.medium > self.high:
            raise ValueError(f"medium ({self.medium}) must not exceed high ({self.high})")
        return self

    def classify(self, max_percentage: float) -> RiskLevel:
        if max_percentage > self.high:
            return RiskLevel.HIGH
        if max_percentage > self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


class RangeThresholds(BaseModel):
    """Range below ``high`` is High, below ``medium`` Medium."""

    high: int
    medium: int

    @model_validator(mode="after")
    def _check_order(self) -> "RangeThresholds":
        if self.high > self.medium:
            raise ValueError(f"high ({self.high}) must not exceed medium ({self.medium})")
        return self

    def classify(self, value_range: int) -> RiskLevel:
        if value_range < self.high:
            return RiskLevel.HIGH
        if value_range < self.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW


class RiskThresholds(BaseModel):
    gender: ConcentrationThresholds = ConcentrationThresholds(high=75.0, medium=60.0)
    race_ethnicity: ConcentrationThresholds = ConcentrationThresholds(high=70.0, medium=50.0)
    age: RangeThresholds = RangeThresholds(high=20, medium=40)

    def for_attribute(self, attribute_type: AttributeType):
        return {
            AttributeType.GENDER: self.gender,
            AttributeType.AGE: self.age,
            AttributeType.RACE_ETHNICITY: self.race_ethnicity,
        }[attribute_type]


DEFAULT_THRESHOLDS = RiskThresholds()

# attribute -> (low-risk message, template for Medium/High)
_RECOMMENDATIONS = {
    AttributeType.GENDER: (
        "Distribution is balanced",
        "Resample to achieve 50/50 balance. Current: {current}",
    ),
    AttributeType.AGE: (
        "Age distribution is diverse",
        "Expand age range. Current range: {current} years",
    ),
    AttributeType.RACE_ETHNICITY: (
        "Racial distribution is balanced",
        "Increase diversity. Current: {current}",
    ),
}


def classify_risk(
    attribute_type: AttributeType,
    distribution: Distribution,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> RiskLevel:
    bands = thresholds.for_attribute(attribute_type)
    if isinstance(distribution, NumericDistribution):
        if not isinstance(bands, RangeThresholds):
            raise TypeError(f"{attribute_type.value} has no range thresholds")
        return bands.classify(distribution.range)
    if not isinstance(bands, ConcentrationThresholds):
        raise TypeError(f"{attribute_type.value} has no concentration thresholds")
    return bands.classify(distribution.max_percentage)


def _describe(distribution: Distribution) -> str:
    if isinstance(distribution, CategoricalDistribution):
        return json.dumps(distribution.percentages, separators=(",", ":"))
    return f"{distribution.min}-{distribution.max}"


def build_recommendation(
    attribute_type: AttributeType,
    distribution: Distribution,
    risk_level: RiskLevel,
) -> str:
    """Guidance text for a finding; Medium and High embed the current distribution."""
    balanced, template = _RECOMMENDATIONS[attribute_type]
    if risk_level == RiskLevel.LOW:
        return balanced
    return template.format(current=_describe(distribution))
