"""Backend core package.

Contains the bias analysis engine (column detection, distributions, risk
classification, report aggregation) plus schemas, configuration and utilities.
"""
from .analysis import analyze
from .exceptions import BiasEngineError, ConfigurationError, MalformedInput, UnsupportedInputKind
from .schema import AnalysisReport, AttributeFinding, AttributeType, RiskLevel
