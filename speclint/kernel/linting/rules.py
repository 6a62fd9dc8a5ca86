"""Lint rule protocol and runner for package specs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from speclint.kernel.linting.models import Finding, RuleScope, Severity
from speclint.kernel.ports.build_invoker import BuildOutcome
from speclint.kernel.spec.models import PlatformSpec, Specification


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Immutable input handed to every rule.

    Whole-spec rules see ``platform=None``. Per-platform rules see the
    platform id, its declared layout and, in deep mode, the files resolved
    from the fetched tree plus the build outcome (None if no build ran).
    """

    spec: Specification
    spec_path: Path
    platform: str | None = None
    files: tuple[Path, ...] | None = None
    build: BuildOutcome | None = None

    @property
    def platform_spec(self) -> PlatformSpec:
        if self.platform is None:
            raise ValueError("whole-spec rules have no platform")
        return self.spec.platforms.get(self.platform, PlatformSpec())


class LintRule(Protocol):
    """Protocol for a single lint rule."""

    rule_id: str
    severity: Severity
    scope: RuleScope
    requires_fetch: bool
    description: str

    def check(self, ctx: RuleContext) -> list[Finding]:
        """Run this rule against the context and return findings."""
        ...


class BaseRule:
    """Convenience base carrying the rule metadata and a finding factory."""

    rule_id: str = ""
    severity: Severity = Severity.ERROR
    scope: RuleScope = RuleScope.WHOLE_SPEC
    requires_fetch: bool = False
    description: str = ""

    def finding(self, ctx: RuleContext, message: str) -> Finding:
        return Finding(
            spec=ctx.spec.identity,
            rule_id=self.rule_id,
            severity=self.severity,
            message=message,
            platform=ctx.platform,
        )

    def check(self, ctx: RuleContext) -> list[Finding]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_id} {self.severity.label}>"


def run_rules(rules: Iterable[LintRule], ctx: RuleContext) -> list[Finding]:
    """Run rules against a context, preserving rule order."""
    findings: list[Finding] = []
    for rule in rules:
        findings.extend(rule.check(ctx))
    return findings
