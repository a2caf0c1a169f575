"""Keyword match type conversion pipeline.

Flow for every request:
1. tokenize: split raw text on commas and newlines
2. detect: strip existing notation, giving the bare keyword and its match type
3. validate: length and character checks on the bare keyword
4. convert: re-wrap valid keywords in the target notation, then dedupe and sort
"""

import logging
import re
import time
from collections.abc import Callable, Iterable

from pydantic import BaseModel, Field

from matchswitch.config import Settings, get_settings
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

logger = logging.getLogger(__name__)

# Scanned in this order; the first character found is the one reported
INVALID_CHARS = ("!", "@", "%", ",", '"', "(", ")", "=", "{", "}", ";", "~", "`", "<", ">", "?", "\\", "|")
NOTATION_CHARS = ('"', "[", "]")

DEFAULT_MAX_KEYWORD_LENGTH = 100

_SPLIT_RE = re.compile(r"[,\n]")
_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_JS_URI_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE | re.ASCII)
_BROAD_SUFFIX_RE = re.compile(r"\s*\(broad\)\s*$", re.IGNORECASE)


def tokenize(raw: str, max_length: int, max_count: int) -> TokenizeResult:
    """
    Split raw input into keyword tokens.

    Oversized input yields no tokens at all, so callers reject the whole
    request instead of processing part of it. Past ``max_count`` the first
    tokens are kept and the result is flagged as truncated.
    """
    if len(raw) > max_length:
        return TokenizeResult(oversized=True)

    tokens = [piece.strip() for piece in _SPLIT_RE.split(raw)]
    tokens = [t for t in tokens if t]

    if len(tokens) > max_count:
        return TokenizeResult(tokens=tokens[:max_count], truncated=True)

    return TokenizeResult(tokens=tokens)


def sanitize(token: str) -> str:
    """Remove script blocks, javascript: URIs and inline event handlers."""
    cleaned = _SCRIPT_RE.sub("", token)
    cleaned = _JS_URI_RE.sub("", cleaned)
    cleaned = _EVENT_HANDLER_RE.sub("", cleaned)
    return cleaned.strip()


def detect(token: str) -> DetectedKeyword:
    """
    Detect the match type notation of a token and unwrap it.

    ``[kw]`` is exact, ``"kw"`` is phrase, anything else is broad. A trailing
    ``(broad)`` label is dropped first. Padding inside a wrapper is trimmed so
    ``[ foo ]`` and ``foo`` name the same keyword.
    """
    text = _BROAD_SUFFIX_RE.sub("", sanitize(token))

    # A lone bracket or quote must not count as both opener and closer
    if len(text) >= 2:
        if text.startswith("[") and text.endswith("]"):
            return DetectedKeyword(match_type=MatchType.EXACT, bare=text[1:-1].strip())
        if text.startswith('"') and text.endswith('"'):
            return DetectedKeyword(match_type=MatchType.PHRASE, bare=text[1:-1].strip())

    return DetectedKeyword(match_type=MatchType.BROAD, bare=text)


def validate(bare: str, max_length: int = DEFAULT_MAX_KEYWORD_LENGTH) -> KeywordCheck:
    """
    Validate a bare keyword. Only the first failing rule is reported.

    Args:
        bare: Keyword with its match type wrapper already removed
        max_length: Longest keyword accepted

    Returns:
        KeywordCheck describing the outcome
    """
    if len(bare) > max_length:
        return KeywordCheck(
            is_valid=False,
            error_kind=ErrorKind.TOO_LONG,
            message=f"Keyword too long (max {max_length} characters)",
        )

    for char in INVALID_CHARS:
        if char in bare:
            return KeywordCheck(
                is_valid=False,
                error_kind=ErrorKind.INVALID_CHAR,
                invalid_char=char,
                message=f"Contains invalid character: {char}",
            )

    if any(char in bare for char in NOTATION_CHARS):
        return KeywordCheck(
            is_valid=False,
            error_kind=ErrorKind.EMBEDDED_NOTATION,
            message="Contains match type signifiers within keyword",
        )

    if not bare.strip():
        return KeywordCheck(
            is_valid=False,
            error_kind=ErrorKind.EMPTY,
            message="Empty keyword after cleaning",
        )

    return KeywordCheck(is_valid=True)


def convert(bare: str, target: MatchType | str) -> str:
    """Wrap a bare keyword in the notation of ``target``. Unknown targets fall back to broad."""
    try:
        match_type = MatchType(target)
    except ValueError:
        logger.warning(f"Unknown match type {target!r}, defaulting to broad")
        match_type = MatchType.BROAD

    if match_type == MatchType.PHRASE:
        return f'"{bare}"'
    if match_type == MatchType.EXACT:
        return f"[{bare}]"
    return bare


def aggregate(
    tokens: Iterable[str],
    target: MatchType | str,
    max_keyword_length: int = DEFAULT_MAX_KEYWORD_LENGTH,
) -> tuple[list[str], ConversionSummary, list[ValidationResult]]:
    """
    Run detect, validate and convert over every token.

    Returns:
        Sorted unique converted keywords, the run summary, and one
        ValidationResult per token in input order
    """
    converted: set[str] = set()
    validation_results: list[ValidationResult] = []
    duplicate_count = 0
    invalid_count = 0

    for token in tokens:
        detected = detect(token)
        check = validate(detected.bare, max_keyword_length)
        validation_results.append(ValidationResult(original=token, **check.model_dump()))

        if not check.is_valid:
            invalid_count += 1
            continue

        keyword = convert(detected.bare, target)
        if keyword in converted:
            duplicate_count += 1
        else:
            converted.add(keyword)

    keywords = sorted(converted)
    summary = ConversionSummary(
        keyword_count=len(keywords),
        duplicate_count=duplicate_count,
        invalid_count=invalid_count,
    )
    return keywords, summary, validation_results


class PipelineOptions(BaseModel):
    """Limits applied to each conversion request."""

    max_input_length: int = Field(default=10_000, gt=0, description="Maximum input characters")
    max_keywords: int = Field(default=1000, gt=0, description="Maximum keywords per request")
    max_keyword_length: int = Field(
        default=DEFAULT_MAX_KEYWORD_LENGTH, gt=0, description="Maximum characters per keyword"
    )
    cooldown_seconds: float = Field(
        default=0.1, ge=0, description="Minimum delay between two requests"
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineOptions":
        return cls(
            max_input_length=settings.max_input_length,
            max_keywords=settings.max_keywords,
            max_keyword_length=settings.max_keyword_length,
            cooldown_seconds=settings.cooldown_seconds,
        )


class KeywordPipeline:
    """
    Converts keyword lists between match types.

    Holds the request limits and the time of the last accepted request.
    Requests arriving within ``cooldown_seconds`` of that are rejected,
    not queued. No error raised by a stage escapes ``run``: every problem
    is reported through the returned ConversionResult.
    """

    def __init__(
        self,
        options: PipelineOptions | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or get_settings()
        self.options = options or PipelineOptions.from_settings(self.settings)
        self._clock = clock
        self._last_run: float | None = None

    def run(self, raw: str, target: MatchType | str) -> ConversionResult:
        """
        Convert every keyword in ``raw`` to the ``target`` match type.

        Args:
            raw: Keywords separated by commas or newlines
            target: Match type to convert to

        Returns:
            ConversionResult; check ``status`` for rejected requests
        """
        target_type = self._resolve_target(target)

        if not raw.strip():
            return ConversionResult(target_type=target_type, warnings=["No keywords entered"])

        if self._is_rate_limited():
            logger.info(
                "Conversion rejected: requested too soon after the previous one",
                extra={"status": ConversionStatus.RATE_LIMITED.value},
            )
            return ConversionResult(
                status=ConversionStatus.RATE_LIMITED,
                target_type=target_type,
                message="Please wait a moment before processing more keywords.",
            )

        tokenized = tokenize(raw, self.options.max_input_length, self.options.max_keywords)

        if tokenized.oversized:
            logger.info(
                f"Conversion rejected: input of {len(raw)} characters is too large",
                extra={"status": ConversionStatus.OVERSIZED_INPUT.value},
            )
            return ConversionResult(
                status=ConversionStatus.OVERSIZED_INPUT,
                target_type=target_type,
                message=f"Input too large. Maximum {self.options.max_input_length} characters allowed.",
            )

        warnings = []
        if tokenized.truncated:
            logger.info(f"Input truncated to the first {self.options.max_keywords} keywords")
            warnings.append(f"Too many keywords. Maximum {self.options.max_keywords} keywords allowed.")

        keywords, summary, validation_results = aggregate(
            tokenized.tokens, target_type, self.options.max_keyword_length
        )

        logger.debug(
            f"Converted {len(tokenized.tokens)} tokens to {target_type.value}: "
            f"{summary.keyword_count} keywords, {summary.duplicate_count} duplicates, "
            f"{summary.invalid_count} invalid",
            extra={
                "status": ConversionStatus.OK.value,
                "target_type": target_type.value,
                "token_count": len(tokenized.tokens),
                **summary.model_dump(),
            },
        )

        return ConversionResult(
            target_type=target_type,
            keywords=keywords,
            summary=summary,
            validation_results=validation_results,
            truncated=tokenized.truncated,
            warnings=warnings,
        )

    def reset(self) -> None:
        """Forget the last request time."""
        self._last_run = None

    def _is_rate_limited(self) -> bool:
        now = self._clock()
        if self._last_run is not None and (now - self._last_run) < self.options.cooldown_seconds:
            return True
        self._last_run = now
        return False

    @staticmethod
    def _resolve_target(target: MatchType | str) -> MatchType:
        try:
            return MatchType(target)
        except ValueError:
            logger.warning(f"Unknown match type {target!r}, defaulting to broad")
            return MatchType.BROAD
