"""Pydantic models for keyword match type conversion."""

from enum import Enum

from pydantic import BaseModel, Field


class MatchType(str, Enum):
    """Keyword match type notations."""

    BROAD = "broad"  # keyword
    PHRASE = "phrase"  # "keyword"
    EXACT = "exact"  # [keyword]


class ErrorKind(str, Enum):
    """Reason a keyword was rejected by the validator."""

    TOO_LONG = "too_long"
    INVALID_CHAR = "invalid_char"
    EMBEDDED_NOTATION = "embedded_notation"
    EMPTY = "empty"


class ConversionStatus(str, Enum):
    """Outcome of a whole conversion request."""

    OK = "ok"
    OVERSIZED_INPUT = "oversized_input"
    RATE_LIMITED = "rate_limited"


class TokenizeResult(BaseModel):
    """Tokens split out of the raw input, plus the limit conditions hit."""

    tokens: list[str] = Field(default_factory=list)
    truncated: bool = Field(default=False, description="More tokens than the keyword limit")
    oversized: bool = Field(default=False, description="Input longer than the length limit")


class DetectedKeyword(BaseModel):
    """A token with its match type wrapper removed."""

    match_type: MatchType
    bare: str


class KeywordCheck(BaseModel):
    """Result of validating a single bare keyword."""

    is_valid: bool
    error_kind: ErrorKind | None = None
    invalid_char: str | None = Field(
        default=None, description="Offending character for INVALID_CHAR errors"
    )
    message: str | None = None


class ValidationResult(KeywordCheck):
    """Per-token validation record, emitted in input order."""

    original: str = Field(description="The token as it appeared in the input")


class ConversionSummary(BaseModel):
    """Counts derived from one conversion run."""

    keyword_count: int = Field(default=0, ge=0, description="Unique keywords in the output")
    duplicate_count: int = Field(default=0, ge=0, description="Valid tokens dropped as duplicates")
    invalid_count: int = Field(default=0, ge=0, description="Tokens that failed validation")


class ConversionResult(BaseModel):
    """Everything the UI shell needs to render one conversion request."""

    status: ConversionStatus = ConversionStatus.OK
    target_type: MatchType = MatchType.BROAD
    keywords: list[str] = Field(
        default_factory=list, description="Converted, deduplicated and sorted keywords"
    )
    summary: ConversionSummary = Field(default_factory=ConversionSummary)
    validation_results: list[ValidationResult] = Field(default_factory=list)
    truncated: bool = Field(default=False, description="Input had more tokens than allowed")
    warnings: list[str] = Field(default_factory=list)
    message: str | None = Field(default=None, description="Reason a request was rejected")

    @property
    def output_text(self) -> str:
        """Keywords joined one per line, ready for display or copying."""
        return "\n".join(self.keywords)

    @property
    def is_rejected(self) -> bool:
        return self.status != ConversionStatus.OK

    @property
    def invalid_results(self) -> list[ValidationResult]:
        return [r for r in self.validation_results if not r.is_valid]
