"""Normalization of raw report records into findings."""

from .finding_normalizer import FindingNormalizer, MalformedReportError

__all__ = ["FindingNormalizer", "MalformedReportError"]
