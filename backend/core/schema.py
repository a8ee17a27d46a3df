"""Pydantic models used by the engine and the API endpoints.

Defines attribute findings, the tagged distribution variant, the aggregate
analysis report, and the request/response schemas built around them.
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class AttributeType(str, Enum):
    GENDER = "Gender"
    AGE = "Age"
    RACE_ETHNICITY = "Race/Ethnicity"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CategoricalDistribution(BaseModel):
    """Percentage of non-empty cells per category, in first-seen order."""

    kind: Literal["categorical"] = "categorical"
    percentages: Dict[str, float]

    @property
    def max_percentage(self) -> float:
        return max(self.percentages.values())


class NumericDistribution(BaseModel):
    """Summary of the integer sample parsed from a numeric column."""

    kind: Literal["numeric"] = "numeric"
    average: float
    min: int
    max: int
    range: int


Distribution = Annotated[
    Union[CategoricalDistribution, NumericDistribution],
    Field(discriminator="kind"),
]


class AttributeFinding(BaseModel):
    attribute_type: AttributeType
    distribution: Distribution
    risk_level: RiskLevel
    recommendation: str


class AnalysisReport(BaseModel):
    findings: List[AttributeFinding] = Field(default_factory=list)
    overall_risk: RiskLevel
    total_rows: int
    columns_analyzed: int
    generated_at: datetime

    def to_record(self) -> Dict[str, Any]:
        """Plain JSON-compatible record, suitable for a document store."""
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "AnalysisReport":
        return cls.model_validate(record)


# --- API payloads ---

class ColumnsResponse(BaseModel):
    detected_attributes: Dict[str, str]
    dataset_analysis: Dict[str, Any]


class RowsRequest(BaseModel):
    rows: List[Dict[str, Any]]
    attribute_keywords: Optional[Dict[str, List[str]]] = None
