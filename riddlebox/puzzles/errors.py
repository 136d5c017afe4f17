# riddlebox/puzzles/errors.py
"""
Failure taxonomy for the puzzle content pipeline.

Everything under GenerationError is recovered inside the pipeline by serving
a fallback record. CorpusUnavailable is the one fatal condition: the fallback
floor itself is broken, so the caller gets an explicit error response.
"""

from __future__ import annotations

from typing import Optional


class PuzzlePipelineError(Exception):
    """Base class for every pipeline failure."""

    reason = "pipeline_error"


class GenerationError(PuzzlePipelineError):
    reason = "generation_error"


class NoCredentials(GenerationError):
    reason = "no_credentials"


class UpstreamTimeout(GenerationError):
    reason = "upstream_timeout"


class UpstreamError(GenerationError):
    reason = "upstream_error"

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class EmptyUpstreamResponse(GenerationError):
    reason = "empty_upstream_response"


class CorpusUnavailable(PuzzlePipelineError):
    reason = "corpus_unavailable"
