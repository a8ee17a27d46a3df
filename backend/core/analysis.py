"""Dataset bias analysis.

Runs column detection, distribution analysis and risk classification over a
tabular dataset and aggregates the findings into an ``AnalysisReport``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import pandas as pd

from .columns import classify_columns, normalize_keyword_table
from .distribution import compute_distribution
from .exceptions import MalformedInput, UnsupportedInputKind
from .risk import DEFAULT_THRESHOLDS, RiskThresholds, build_recommendation, classify_risk
from .schema import AnalysisReport, AttributeFinding, RiskLevel

logger = logging.getLogger(__name__)

# --- Helpers ---

def _to_frame(rows: Any) -> pd.DataFrame:
    """Build a read-only view of the dataset as a frame of raw cells.

    The header is taken from the first row; keys missing from later rows become
    empty cells and keys absent from the first row are ignored.
    """
    if isinstance(rows, pd.DataFrame):
        return rows
    if isinstance(rows, (str, bytes, bytearray, memoryview, Mapping)):
        raise UnsupportedInputKind(f"Expected tabular rows, got {type(rows).__name__}")
    try:
        records = list(rows)
    except TypeError:
        raise UnsupportedInputKind(f"Expected tabular rows, got {type(rows).__name__}") from None

    for record in records:
        if not isinstance(record, Mapping):
            raise UnsupportedInputKind(f"Expected each row to be a mapping, got {type(record).__name__}")
    if not records:
        return pd.DataFrame()

    header = list(records[0].keys())
    if not header:
        raise MalformedInput("Dataset has no header columns")
    return pd.DataFrame(records, columns=header, dtype=object)


def overall_risk(findings: List[AttributeFinding]) -> RiskLevel:
    """Worst risk level across findings; an empty list is Low."""
    levels = {f.risk_level for f in findings}
    if RiskLevel.HIGH in levels:
        return RiskLevel.HIGH
    if RiskLevel.MEDIUM in levels:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_report(findings: List[AttributeFinding], total_rows: int) -> AnalysisReport:
    return AnalysisReport(
        findings=findings,
        overall_risk=overall_risk(findings),
        total_rows=total_rows,
        columns_analyzed=len(findings),
        generated_at=datetime.now(timezone.utc),
    )

# --- Analysis orchestrator ---

def analyze(
    rows: Any,
    declared_attribute_keywords: Optional[Any] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> AnalysisReport:
    """Analyze a dataset for representation bias in protected attributes.

    ``rows`` is a sequence of mappings from column name to cell text, or a
    DataFrame. ``declared_attribute_keywords`` overrides the column keyword
    table and ``thresholds`` the risk bands. Attributes with no matching
    column, or whose column holds no usable values, produce no finding.
    """
    keyword_table = normalize_keyword_table(declared_attribute_keywords)
    thresholds = thresholds or DEFAULT_THRESHOLDS

    frame = _to_frame(rows)
    header = [str(c) for c in frame.columns]
    if len(frame) and not header:
        raise MalformedInput("Dataset has no header columns")

    detected = classify_columns(header, keyword_table)
    findings: List[AttributeFinding] = []
    for attribute_type, column in detected.items():
        values = frame.iloc[:, header.index(column)]
        distribution = compute_distribution(attribute_type, values)
        if distribution is None:
            logger.info("Column %r has no usable values, skipping %s", column, attribute_type.value)
            continue
        risk_level = classify_risk(attribute_type, distribution, thresholds)
        findings.append(
            AttributeFinding(
                attribute_type=attribute_type,
                distribution=distribution,
                risk_level=risk_level,
                recommendation=build_recommendation(attribute_type, distribution, risk_level),
            )
        )
        logger.debug("%s (%r): %s risk", attribute_type.value, column, risk_level.value)

    report = build_report(findings, total_rows=len(frame))
    logger.info(
        "Analyzed %d rows: %d protected attribute(s), overall risk %s",
        report.total_rows,
        report.columns_analyzed,
        report.overall_risk.value,
    )
    return report
