"""Utility functions around the analysis engine.

Includes upload kind detection, CSV decoding into raw-string frames, dataset
structure summaries and CSV export of report findings.
"""
from typing import Any, Dict, Optional
import io
import json
import os

import pandas as pd

from .exceptions import MalformedInput
from .schema import AnalysisReport

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}

EXPORT_COLUMNS = ["attribute_type", "risk_level", "distribution", "recommendation"]


def detect_input_kind(filename: Optional[str], content_type: Optional[str]) -> str:
    """Return "image" for image uploads, "csv" for anything else."""
    if content_type and content_type.lower().startswith("image/"):
        return "image"
    ext = os.path.splitext(filename or "")[1].lower()
    if ext in IMAGE_EXTENSIONS:
        return "image"
    return "csv"


def read_csv_frame(content: bytes) -> pd.DataFrame:
    """Decode CSV bytes keeping every cell as raw text (empty cells as "")."""
    try:
        return pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise MalformedInput("Uploaded file is empty or has no header row") from None
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise MalformedInput(f"Could not parse CSV: {e}") from e


def analyze_dataset_structure(df: pd.DataFrame) -> Dict[str, Any]:
    """Summarize dataset shape and column types."""
    return {
        "total_rows": int(df.shape[0]),
        "total_columns": int(df.shape[1]),
        "column_types": {str(c): str(t) for c, t in df.dtypes.items()},
    }


def report_to_frame(report: AnalysisReport) -> pd.DataFrame:
    """One row per finding; distributions are serialized as JSON."""
    rows = [
        {
            "attribute_type": f.attribute_type.value,
            "risk_level": f.risk_level.value,
            "distribution": json.dumps(f.distribution.model_dump(exclude={"kind"})),
            "recommendation": f.recommendation,
        }
        for f in report.findings
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def report_to_csv(report: AnalysisReport) -> str:
    return report_to_frame(report).to_csv(index=False)
