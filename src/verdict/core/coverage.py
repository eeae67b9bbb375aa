"""Label distribution reports produced by fuzz tests."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union

from verdict.errors import WireDecodeError

CoverageCount = Tuple[Tuple[Tuple[str, ...], int], ...]


@dataclass(frozen=True)
class NoCoverage:
    pass


@dataclass(frozen=True)
class CoverageToReport:
    coverage_count: CoverageCount
    runs_elapsed: int


@dataclass(frozen=True)
class CoverageCheckSucceeded:
    coverage_count: CoverageCount
    runs_elapsed: int


@dataclass(frozen=True)
class CoverageCheckFailed:
    coverage_count: CoverageCount
    runs_elapsed: int
    bad_label: str
    bad_label_percentage: float
    expected_coverage: str


CoverageReport = Union[NoCoverage, CoverageToReport, CoverageCheckSucceeded, CoverageCheckFailed]


def coverage_count(counts: Mapping[Sequence[str], int]) -> CoverageCount:
    """Freeze a label-tuple to count mapping into its canonical sorted form."""

    return tuple(sorted((tuple(labels), int(count)) for labels, count in counts.items()))


def encode_coverage(report: CoverageReport) -> Dict[str, Any]:
    if isinstance(report, NoCoverage):
        return {"type": "NoCoverage", "data": None}
    data: Dict[str, Any] = {
        "coverageCount": [[list(labels), count] for labels, count in report.coverage_count],
        "runsElapsed": report.runs_elapsed,
    }
    if isinstance(report, CoverageToReport):
        return {"type": "CoverageToReport", "data": data}
    if isinstance(report, CoverageCheckSucceeded):
        return {"type": "CoverageCheckSucceeded", "data": data}
    if isinstance(report, CoverageCheckFailed):
        data.update(
            badLabel=report.bad_label,
            badLabelPercentage=report.bad_label_percentage,
            expectedCoverage=report.expected_coverage,
        )
        return {"type": "CoverageCheckFailed", "data": data}
    raise TypeError(f"Unsupported coverage report {report!r}")


def decode_coverage(value: Any) -> CoverageReport:
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        raise WireDecodeError(f"Expected a tagged coverage report, got {value!r}")
    tag = value["type"]
    if tag == "NoCoverage":
        return NoCoverage()
    data = value.get("data")
    if not isinstance(data, dict):
        raise WireDecodeError(f"Coverage report {tag!r} is missing its data")
    counts = _decode_counts(data.get("coverageCount"))
    runs = data.get("runsElapsed")
    if not isinstance(runs, int) or isinstance(runs, bool):
        raise WireDecodeError("Coverage 'runsElapsed' must be an integer")
    if tag == "CoverageToReport":
        return CoverageToReport(coverage_count=counts, runs_elapsed=runs)
    if tag == "CoverageCheckSucceeded":
        return CoverageCheckSucceeded(coverage_count=counts, runs_elapsed=runs)
    if tag == "CoverageCheckFailed":
        percentage = data.get("badLabelPercentage")
        if not isinstance(percentage, (int, float)) or isinstance(percentage, bool):
            raise WireDecodeError("Coverage 'badLabelPercentage' must be a number")
        bad_label = data.get("badLabel")
        expected = data.get("expectedCoverage")
        if not isinstance(bad_label, str) or not isinstance(expected, str):
            raise WireDecodeError("Coverage check failure is missing its label details")
        return CoverageCheckFailed(
            coverage_count=counts,
            runs_elapsed=runs,
            bad_label=bad_label,
            bad_label_percentage=float(percentage),
            expected_coverage=expected,
        )
    raise WireDecodeError(f"Unknown coverage report type {tag!r}")


def _decode_counts(value: Any) -> CoverageCount:
    if not isinstance(value, list):
        raise WireDecodeError("Coverage 'coverageCount' must be a list of pairs")
    pairs: List[Tuple[Tuple[str, ...], int]] = []
    for item in value:
        if not isinstance(item, list) or len(item) != 2:
            raise WireDecodeError(f"Invalid coverage pair {item!r}")
        labels, count = item
        if not isinstance(labels, list) or not all(isinstance(label, str) for label in labels):
            raise WireDecodeError(f"Invalid coverage labels {labels!r}")
        if not isinstance(count, int) or isinstance(count, bool):
            raise WireDecodeError(f"Invalid coverage count {count!r}")
        pairs.append((tuple(labels), count))
    return tuple(pairs)


def coverage_table(report: CoverageReport) -> List[str]:
    """Render the distribution of a report as aligned text rows."""

    if isinstance(report, NoCoverage):
        return []
    rows: List[str] = []
    runs = report.runs_elapsed or 1
    entries = sorted(report.coverage_count, key=lambda pair: (-pair[1], pair[0]))
    names = [", ".join(labels) if labels else "<uncategorized>" for labels, _ in entries]
    width = max((len(name) for name in names), default=0)
    for name, (_, count) in zip(names, entries):
        percent = count / runs * 100
        rows.append(f"{name:<{width}}  {percent:6.1f}%  ({count}x)")
    if isinstance(report, CoverageCheckFailed):
        rows.append(
            f"Label {report.bad_label!r} was {report.bad_label_percentage:.1f}% "
            f"of {report.runs_elapsed} runs, expected {report.expected_coverage}"
        )
    return rows
