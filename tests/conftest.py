"""Pytest configuration and fixtures."""

import logging

import pytest

from matchswitch.config import Settings
from matchswitch.models.keyword import (
    ConversionResult,
    ConversionSummary,
    ErrorKind,
    MatchType,
    ValidationResult,
)
from matchswitch.pipeline.keyword_pipeline import KeywordPipeline, PipelineOptions


class FakeClock:
    """Manually advanced clock for cooldown tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        max_input_length=10_000,
        max_keywords=1000,
        max_keyword_length=100,
        cooldown_seconds=0.1,
        log_level="DEBUG",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pipeline(settings, clock) -> KeywordPipeline:
    """Pipeline with default limits and a fake clock."""
    return KeywordPipeline(options=PipelineOptions.from_settings(settings), settings=settings, clock=clock)


@pytest.fixture
def sample_result() -> ConversionResult:
    """Create a sample phrase conversion result."""
    return ConversionResult(
        target_type=MatchType.PHRASE,
        keywords=['"blue shoes"', '"red shoes"', '"running shoes"'],
        summary=ConversionSummary(keyword_count=3, duplicate_count=1, invalid_count=1),
        validation_results=[
            ValidationResult(original="running shoes", is_valid=True),
            ValidationResult(original="[red shoes]", is_valid=True),
            ValidationResult(original='"blue shoes"', is_valid=True),
            ValidationResult(original="running shoes", is_valid=True),
            ValidationResult(
                original="shoes@sale",
                is_valid=False,
                error_kind=ErrorKind.INVALID_CHAR,
                invalid_char="@",
                message="Contains invalid character: @",
            ),
        ],
    )


@pytest.fixture
def restore_root_logger():
    """Put the root and matchswitch loggers back the way they were after a logging test."""
    root = logging.getLogger()
    app_logger = logging.getLogger("matchswitch")
    saved = [(logger, logger.handlers[:], logger.level, logger.propagate) for logger in (root, app_logger)]
    yield root
    for logger, handlers, level, propagate in saved:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        for handler in handlers:
            logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = propagate
