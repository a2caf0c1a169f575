"""Data models for keyword match type conversion."""

from matchswitch.models.keyword import (
    ConversionResult,
    ConversionStatus,
    ConversionSummary,
    DetectedKeyword,
    ErrorKind,
    KeywordCheck,
    MatchType,
    TokenizeResult,
    ValidationResult,
)

__all__ = [
    "MatchType",
    "ErrorKind",
    "ConversionStatus",
    "TokenizeResult",
    "DetectedKeyword",
    "KeywordCheck",
    "ValidationResult",
    "ConversionSummary",
    "ConversionResult",
]
