"""Core models for the spec linter."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum


class Severity(StrEnum):
    """Finding severity. Only errors affect the verdict."""

    ERROR = "error"
    WARNING = "warning"

    @property
    def label(self) -> str:
        """Label used in rendered reports."""
        return "ERROR" if self is Severity.ERROR else "WARN"


class RuleScope(StrEnum):
    """What a rule is evaluated against."""

    WHOLE_SPEC = "whole_spec"
    PER_PLATFORM = "per_platform"


class Verdict(StrEnum):
    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single rule violation found during analysis.

    ``platform`` is None for whole-spec findings.
    """

    spec: str
    rule_id: str
    severity: Severity
    message: str
    platform: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


def verdict(findings: Iterable[Finding]) -> Verdict:
    """Reduce findings to a verdict: fail iff any error exists."""
    return Verdict.FAIL if any(f.is_error for f in findings) else Verdict.PASS


def only_errors(findings: Iterable[Finding]) -> list[Finding]:
    return [f for f in findings if f.is_error]


class SpecReport:
    """Ordered findings for one spec, plus the facts needed to render them."""

    __slots__ = ("_findings", "identity", "path", "platforms", "skipped_rules")

    def __init__(
        self,
        identity: str,
        path: str,
        platforms: list[str] | None = None,
    ) -> None:
        self.identity = identity
        self.path = path
        self.platforms: list[str] = list(platforms or [])
        self.skipped_rules: dict[str, list[str]] = {}
        self._findings: list[Finding] = []

    def add(self, finding: Finding) -> None:
        self._findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        self._findings.extend(findings)

    @property
    def findings(self) -> list[Finding]:
        """All findings, in emission order."""
        return self._findings

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self._findings if f.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self._findings if f.severity is Severity.WARNING]

    @property
    def is_clean(self) -> bool:
        """True if no findings were produced."""
        return not self._findings

    @property
    def verdict(self) -> Verdict:
        return verdict(self._findings)
