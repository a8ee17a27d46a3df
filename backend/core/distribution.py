"""Per-attribute distributions.

Categorical columns yield a percentage per category; numeric columns (Age) yield
an average/min/max/range summary. Empty cells never enter a denominator.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

from .schema import AttributeType, CategoricalDistribution, Distribution, NumericDistribution

logger = logging.getLogger(__name__)

# Values are case-folded before counting only for these attributes.
CASE_INSENSITIVE_VALUES = {AttributeType.GENDER}

NUMERIC_ATTRIBUTES = {AttributeType.AGE}

_LEADING_INT = r"^\s*([+-]?\d+)"

_ONE_DECIMAL = Decimal("0.1")


def _ratio_to_one_decimal(numerator: int, denominator: int) -> float:
    """``numerator / denominator`` rounded to one decimal place, halves up."""
    exact = Decimal(numerator) / Decimal(denominator)
    return float(exact.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def categorical_distribution(values: pd.Series, case_insensitive: bool = False) -> Optional[CategoricalDistribution]:
    """Percentage of non-empty cells per category.

    With ``case_insensitive`` values are trimmed and lower-cased before
    counting; otherwise the raw cell text is the category. Each percentage is
    rounded independently, so the total may drift from 100 by rounding.
    Returns ``None`` when the column has no non-empty cells.
    """
    cells = values.dropna().astype(str)
    if case_insensitive:
        cells = cells.str.strip().str.lower()
    cells = cells[cells != ""]
    if cells.empty:
        return None

    counts = cells.value_counts(sort=False).reindex(pd.unique(cells))
    total = int(counts.sum())
    return CategoricalDistribution(
        percentages={str(label): _ratio_to_one_decimal(100 * int(n), total) for label, n in counts.items()}
    )


def parse_integers(values: pd.Series) -> pd.Series:
    """Leading integer of each cell; cells without one are dropped."""
    extracted = values.dropna().astype(str).str.extract(_LEADING_INT, expand=False)
    return pd.to_numeric(extracted.dropna()).astype("int64")


def numeric_summary(values: pd.Series) -> Optional[NumericDistribution]:
    """Average, min, max and range of the integer sample in ``values``.

    Returns ``None`` if no cell parses, so an empty sample never reaches the mean.
    """
    sample = parse_integers(values)
    excluded = len(values) - len(sample)
    if excluded:
        logger.debug("Excluded %d unparsable cell(s) from %r", excluded, values.name)
    if sample.empty:
        return None

    lowest = int(sample.min())
    highest = int(sample.max())
    return NumericDistribution(
        average=_ratio_to_one_decimal(int(sample.sum()), len(sample)),
        min=lowest,
        max=highest,
        range=highest - lowest,
    )


def compute_distribution(attribute_type: AttributeType, values: pd.Series) -> Optional[Distribution]:
    if attribute_type in NUMERIC_ATTRIBUTES:
        return numeric_summary(values)
    return categorical_distribution(values, case_insensitive=attribute_type in CASE_INSENSITIVE_VALUES)
