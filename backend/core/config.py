"""Configuration for backend services.

Centralizes environment variables for risk thresholds, upload limits, CORS and logging.
"""
from typing import List
import os

from dotenv import load_dotenv
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .risk import ConcentrationThresholds, RangeThresholds, RiskThresholds

_ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
_ENV_PATH = os.path.join(_ROOT_DIR, ".env")
if os.path.exists(_ENV_PATH):
    load_dotenv(_ENV_PATH)
else:
    load_dotenv()


class Settings:
    """Simple settings container using environment variables.

    - MAX_UPLOAD_MB: largest accepted upload, in megabytes
    - ALLOWED_ORIGINS: comma-separated CORS origins ("*" for any)
    - LOG_LEVEL: root logging level name
    """

    MAX_UPLOAD_MB: int = int(os.environ.get("MAX_UPLOAD_MB", "100"))
    ALLOWED_ORIGINS: List[str] = [
        o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "*").split(",") if o.strip()
    ]
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    # --- Risk thresholds (defaults mirror the built-in bands) ---
    GENDER_HIGH_THRESHOLD: float = float(os.environ.get("GENDER_HIGH_THRESHOLD", "75"))
    GENDER_MEDIUM_THRESHOLD: float = float(os.environ.get("GENDER_MEDIUM_THRESHOLD", "60"))
    RACE_HIGH_THRESHOLD: float = float(os.environ.get("RACE_HIGH_THRESHOLD", "70"))
    RACE_MEDIUM_THRESHOLD: float = float(os.environ.get("RACE_MEDIUM_THRESHOLD", "50"))
    # Age is scored on range: below AGE_HIGH_RANGE is High risk
    AGE_HIGH_RANGE: int = int(os.environ.get("AGE_HIGH_RANGE", "20"))
    AGE_MEDIUM_RANGE: int = int(os.environ.get("AGE_MEDIUM_RANGE", "40"))

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    def risk_thresholds(self) -> RiskThresholds:
        """Threshold bands from the environment; inverted bands raise ConfigurationError."""
        try:
            return RiskThresholds(
                gender=ConcentrationThresholds(high=self.GENDER_HIGH_THRESHOLD, medium=self.GENDER_MEDIUM_THRESHOLD),
                race_ethnicity=ConcentrationThresholds(high=self.RACE_HIGH_THRESHOLD, medium=self.RACE_MEDIUM_THRESHOLD),
                age=RangeThresholds(high=self.AGE_HIGH_RANGE, medium=self.AGE_MEDIUM_RANGE),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid risk threshold settings: {e}") from e

settings = Settings()
