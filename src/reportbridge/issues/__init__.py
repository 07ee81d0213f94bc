"""Issue report parsing - structured XML and line-oriented text reports."""

from reportbridge.issues.models import Finding, ParseResult, Severity
from reportbridge.issues.oclint import parse_oclint
from reportbridge.issues.parsers import parse_swiftlint, parse_tailor

__all__ = [
    "Finding",
    "ParseResult",
    "Severity",
    "parse_oclint",
    "parse_swiftlint",
    "parse_tailor",
]
