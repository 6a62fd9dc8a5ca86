"""Render lint findings into the deterministic text report.

Layout for one spec::

    Bananas (0.0.1)
      - ERROR | Missing license[:file] or [:text]
      [ios]
      - WARN | Use requires_arc instead of -fobjc-arc in compiler_flags

Whole-spec findings come first, then one group per platform in declaration
order. Platform sub-headers are only printed when the spec has more than one
platform. The ``only_errors`` filter hides warnings from the text and never
changes a verdict.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from speclint.kernel.linting.models import Finding, SpecReport, Verdict, verdict

INDENT = "  "


def group_findings(report: SpecReport) -> list[tuple[str | None, list[Finding]]]:
    """Group findings by platform: whole-spec first, then platform order.

    Emission order is preserved inside each group.
    """
    order: list[str | None] = [None, *report.platforms]
    groups: dict[str | None, list[Finding]] = {key: [] for key in order}
    for finding in report.findings:
        if finding.platform not in groups:
            groups[finding.platform] = []
            order.append(finding.platform)
        groups[finding.platform].append(finding)
    return [(key, groups[key]) for key in order if groups[key]]


def format_finding(finding: Finding) -> str:
    first, *rest = finding.message.splitlines() or [""]
    lines = [f"{INDENT}- {finding.severity.label} | {first}"]
    # Continuation lines are indented under the bullet
    lines.extend(f"{INDENT * 2}{line}" for line in rest)
    return "\n".join(lines)


def render_spec(report: SpecReport, only_errors: bool = False) -> tuple[str, Verdict]:
    """Render one spec's findings.

    Returns
    -------
    tuple[str, Verdict]
        The rendered block and the spec verdict (computed from all findings)
    """
    lines = [report.identity]
    show_platform_headers = len(report.platforms) > 1
    for platform, findings in group_findings(report):
        shown = [f for f in findings if f.is_error] if only_errors else findings
        if not shown:
            continue
        if platform is not None and show_platform_headers:
            lines.append(f"{INDENT}[{platform}]")
        lines.extend(format_finding(f) for f in shown)
    return "\n".join(lines), verdict(report.findings)


def summary_line(reports: Sequence[SpecReport]) -> str:
    total = len(reports)
    failed = sum(1 for r in reports if r.verdict is Verdict.FAIL)
    noun = "spec" if total == 1 else "specs"
    if failed:
        return f"{failed} out of {total} {noun} failed validation"
    return f"{total} {noun} passed validation"


def render_session(reports: Sequence[SpecReport], only_errors: bool = False) -> str:
    """Render every spec in input order, followed by the summary line."""
    blocks = [render_spec(report, only_errors)[0] for report in reports]
    blocks.append(summary_line(reports))
    return "\n\n".join(blocks) + "\n"


def report_payload(reports: Sequence[SpecReport], only_errors: bool = False) -> dict[str, Any]:
    """Machine-readable form of the session report."""
    specs = []
    for report in reports:
        findings = report.errors if only_errors else report.findings
        specs.append({
            "spec": report.identity,
            "path": report.path,
            "verdict": report.verdict.value,
            "errors": len(report.errors),
            "warnings": len(report.warnings),
            "findings": [
                {
                    "rule_id": f.rule_id,
                    "severity": f.severity.value,
                    "platform": f.platform,
                    "message": f.message,
                }
                for f in findings
            ],
        })
    return {
        "verdict": verdict(f for r in reports for f in r.findings).value,
        "specs": specs,
    }
