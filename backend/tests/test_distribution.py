"""Tests for categorical and numeric distributions."""
import pandas as pd
import pytest

from backend.core.distribution import categorical_distribution, compute_distribution, numeric_summary
from backend.core.schema import AttributeType, CategoricalDistribution, NumericDistribution


def test_gender_values_are_trimmed_and_lowercased():
    values = pd.Series(["Male", " male ", "FEMALE", "female", "", None])
    dist = compute_distribution(AttributeType.GENDER, values)
    assert isinstance(dist, CategoricalDistribution)
    assert dist.percentages == {"male": 50.0, "female": 50.0}


def test_race_values_are_case_sensitive():
    values = pd.Series(["Asian", "asian", "Asian", "Black", ""])
    dist = compute_distribution(AttributeType.RACE_ETHNICITY, values)
    assert dist.percentages == {"Asian": 50.0, "asian": 25.0, "Black": 25.0}


def test_categories_keep_first_seen_order():
    dist = categorical_distribution(pd.Series(["b", "a", "a", "c", "a"]))
    assert list(dist.percentages) == ["b", "a", "c"]


def test_empty_cells_excluded_from_denominator():
    dist = categorical_distribution(pd.Series(["x", "", "y", None, "x", float("nan")]))
    assert dist.percentages == {"x": pytest.approx(66.7), "y": pytest.approx(33.3)}


def test_all_empty_column_yields_no_distribution():
    assert categorical_distribution(pd.Series(["", None, ""])) is None
    assert categorical_distribution(pd.Series([], dtype=object)) is None


def test_three_way_split_rounds_each_category():
    dist = categorical_distribution(pd.Series(["A", "B", "C"]))
    assert dist.percentages == {"A": 33.3, "B": 33.3, "C": 33.3}


def test_uneven_split_rounds_each_category():
    dist = categorical_distribution(pd.Series(["a", "b", "b"]))
    assert dist.percentages == {"a": 33.3, "b": 66.7}


def test_percentage_halves_round_up():
    # 1/16 = 6.25%, 15/16 = 93.75%
    dist = categorical_distribution(pd.Series(["rare"] + ["common"] * 15))
    assert dist.percentages == {"rare": 6.3, "common": 93.8}


def test_percentage_near_tier_boundary_is_not_inflated():
    values = pd.Series(["a"] * 1876 + ["b"] * 3 + ["c"] * 621)
    dist = categorical_distribution(values)
    assert dist.percentages == {"a": 75.0, "b": 0.1, "c": 24.8}


@pytest.mark.parametrize("n_categories", [2, 3, 4])
def test_percentages_sum_to_one_hundred(n_categories):
    values = pd.Series([f"group{i}" for i in range(n_categories)] * 3)
    dist = categorical_distribution(values)
    assert len(dist.percentages) == n_categories
    assert abs(sum(dist.percentages.values()) - 100.0) <= 0.1


def test_numeric_summary():
    dist = numeric_summary(pd.Series(["25", "30", "41", "", None]))
    assert isinstance(dist, NumericDistribution)
    assert dist.average == 32.0
    assert (dist.min, dist.max, dist.range) == (25, 41, 16)


def test_numeric_summary_parses_leading_integer():
    dist = numeric_summary(pd.Series([" 20", "30.9", "40 years", "unknown", "-"]))
    assert (dist.min, dist.max) == (20, 40)
    assert dist.average == 30.0


def test_numeric_summary_rounds_average():
    dist = numeric_summary(pd.Series(["20", "21", "21"]))
    assert dist.average == 20.7


def test_numeric_summary_with_no_parsable_cells():
    assert numeric_summary(pd.Series(["n/a", "", None])) is None


def test_age_dispatches_to_numeric_summary():
    dist = compute_distribution(AttributeType.AGE, pd.Series(["18", "75"]))
    assert isinstance(dist, NumericDistribution)
    assert dist.range == 57


def test_numeric_average_halves_round_up():
    dist = numeric_summary(pd.Series(["20", "20", "20", "21"]))
    assert dist.average == 20.3
