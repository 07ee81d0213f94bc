"""Coverage report aggregation.

Usage:
    from reportbridge.coverage import parse_cobertura, CoverageMeasures

    with path.open("rb") as handle:
        for file_coverage in parse_cobertura(handle):
            measures = CoverageMeasures.from_file(file_coverage)
"""

from reportbridge.coverage.cobertura import (
    aggregate_coverage,
    parse_cobertura,
    parse_condition_coverage,
    parse_number,
)
from reportbridge.coverage.measures import CoverageMeasures, CoverageSummary
from reportbridge.coverage.models import FileCoverage, LineCoverage

__all__ = [
    # Models
    "FileCoverage",
    "LineCoverage",
    # Measures
    "CoverageMeasures",
    "CoverageSummary",
    # Cobertura
    "aggregate_coverage",
    "parse_cobertura",
    "parse_condition_coverage",
    "parse_number",
]
