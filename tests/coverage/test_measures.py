"""Tests for coverage/models.py and coverage/measures.py."""

from __future__ import annotations

import pytest

from reportbridge.coverage.measures import CoverageMeasures, CoverageSummary
from reportbridge.coverage.models import FileCoverage, LineCoverage


def _file(*lines: LineCoverage) -> FileCoverage:
    coverage = FileCoverage(path="Foo.swift")
    for line in lines:
        coverage.record(line)
    return coverage


class TestLineCoverage:
    """Tests for LineCoverage validation."""

    def test_defaults_to_non_branch(self) -> None:
        line = LineCoverage(line_number=3, hits=1)
        assert not line.is_branch
        assert line.is_covered

    def test_zero_hits_is_not_covered(self) -> None:
        assert not LineCoverage(line_number=3, hits=0).is_covered

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"line_number": 0, "hits": 1},
            {"line_number": 1, "hits": -1},
            {"line_number": 1, "hits": 1, "covered_conditions": 3, "total_conditions": 2},
            {"line_number": 1, "hits": 1, "covered_conditions": -1, "total_conditions": 2},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            LineCoverage(**kwargs)


class TestFileCoverage:
    """Tests for FileCoverage accumulation."""

    def test_record_overwrites_same_line(self) -> None:
        coverage = _file(
            LineCoverage(line_number=10, hits=5),
            LineCoverage(line_number=10, hits=2),
        )
        assert coverage.lines[10].hits == 2
        assert coverage.lines_to_cover == 1

    def test_counts(self) -> None:
        coverage = _file(
            LineCoverage(line_number=1, hits=3),
            LineCoverage(line_number=2, hits=0),
            LineCoverage(line_number=3, hits=1, is_branch=True, covered_conditions=1, total_conditions=4),
        )
        assert coverage.lines_to_cover == 3
        assert coverage.covered_lines == 2
        assert coverage.conditions_to_cover == 4
        assert coverage.covered_conditions == 1


class TestCoverageMeasures:
    """Tests for CoverageMeasures.from_file."""

    def test_from_file(self) -> None:
        coverage = _file(
            LineCoverage(line_number=2, hits=0, is_branch=True, covered_conditions=1, total_conditions=2),
            LineCoverage(line_number=1, hits=3),
        )

        measures = CoverageMeasures.from_file(coverage)

        assert measures.line_hits == {1: 3, 2: 0}
        assert list(measures.line_hits) == [1, 2]
        assert measures.lines_to_cover == 2
        assert measures.covered_lines == 1
        assert measures.conditions_to_cover == 2
        assert measures.covered_conditions == 1
        assert measures.conditions_by_line == {2: 2}
        assert measures.covered_conditions_by_line == {2: 1}
        assert measures.line_rate == 0.5
        assert measures.branch_rate == 0.5

    def test_no_branches(self) -> None:
        measures = CoverageMeasures.from_file(_file(LineCoverage(line_number=1, hits=1)))
        assert measures.conditions_by_line == {}
        assert measures.branch_rate is None

    def test_empty_file(self) -> None:
        measures = CoverageMeasures.from_file(FileCoverage(path="Empty.swift"))
        assert measures.lines_to_cover == 0
        assert measures.line_rate == 0.0

    def test_to_dict_uses_string_keys(self) -> None:
        measures = CoverageMeasures.from_file(
            _file(
                LineCoverage(line_number=7, hits=1, is_branch=True, covered_conditions=2, total_conditions=2)
            )
        )
        data = measures.to_dict()
        assert data["line_hits"] == {"7": 1}
        assert data["conditions_by_line"] == {"7": 2}
        assert data["covered_conditions_by_line"] == {"7": 2}


class TestCoverageSummary:
    """Tests for CoverageSummary aggregation."""

    def test_of_sums_measures(self) -> None:
        first = CoverageMeasures(lines_to_cover=4, covered_lines=3)
        second = CoverageMeasures(
            lines_to_cover=6, covered_lines=2, conditions_to_cover=4, covered_conditions=1
        )

        summary = CoverageSummary.of([first, second])

        assert summary.files == 2
        assert summary.lines_to_cover == 10
        assert summary.covered_lines == 5
        assert summary.line_rate == 0.5
        assert summary.branch_rate == 0.25

    def test_to_dict_percentages(self) -> None:
        summary = CoverageSummary.of([CoverageMeasures(lines_to_cover=3, covered_lines=1)])
        data = summary.to_dict()
        assert data["line_coverage_percent"] == 33.33
        assert data["branch_coverage_percent"] is None

    def test_empty(self) -> None:
        summary = CoverageSummary.of([])
        assert summary.files == 0
        assert summary.line_rate == 0.0
