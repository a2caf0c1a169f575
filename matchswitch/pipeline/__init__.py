"""Keyword conversion pipeline."""

from matchswitch.pipeline.keyword_pipeline import (
    KeywordPipeline,
    PipelineOptions,
    aggregate,
    convert,
    detect,
    sanitize,
    tokenize,
    validate,
)

__all__ = [
    "KeywordPipeline",
    "PipelineOptions",
    "tokenize",
    "sanitize",
    "detect",
    "validate",
    "convert",
    "aggregate",
]
