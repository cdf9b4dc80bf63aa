"""Format check results into a text or JSON report."""

from __future__ import annotations

from typing import Iterable, Literal

from sqldocs_check.schemas import CheckResult, Failure, Report

ReportFormat = Literal["text", "json"]


def build_report(results: Iterable[CheckResult]) -> Report:
    """Collect results into a Report, keeping input order."""
    return Report(results=tuple(results))


def format_report(report: Report | Iterable[CheckResult], *, fmt: ReportFormat = "text") -> str:
    """Render a report deterministically.

    Parameters
    ----------
    report : Report | Iterable[CheckResult]
        The run report, or the bare results in input order.
    fmt : str
        ``"text"`` for a human-readable summary, ``"json"`` for the
        serialized Report.
    """
    if not isinstance(report, Report):
        report = build_report(report)

    if fmt == "json":
        return report.model_dump_json(indent=2)
    if fmt != "text":
        raise ValueError(f"Unsupported report format: {fmt!r}")

    lines: list[str] = []
    for result in report.results:
        lines.extend(_render_result(result))

    passed = report.total - report.failed
    noun = "document" if report.total == 1 else "documents"
    lines.append(f"{report.total} {noun} checked: {passed} passed, {report.failed} failed")
    lines.append(f"Overall: {'PASS' if report.passed else 'FAIL'}")
    return "\n".join(lines)


def _render_result(result: CheckResult) -> list[str]:
    lines = [f"{'PASS' if result.passed else 'FAIL'} {result.document}"]
    lines.extend(f"  - {_render_failure(failure)}" for failure in result.failures)
    lines.extend(f"  ! {warning}" for warning in result.warnings)
    return lines


def _render_failure(failure: Failure) -> str:
    location = failure.section
    if failure.line is not None:
        location += f" (line {failure.line})"
    return f"{location} {failure.kind}: {failure.reason}"
