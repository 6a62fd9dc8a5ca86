"""Spec linting: rule catalog, analyzer, report builder and lint session."""

from speclint.kernel.linting.analyzer import AnalysisOptions, Analyzer
from speclint.kernel.linting.models import (
    Finding,
    RuleScope,
    Severity,
    SpecReport,
    Verdict,
    verdict,
)
from speclint.kernel.linting.report import render_session, render_spec
from speclint.kernel.linting.rules import LintRule, RuleContext, run_rules
from speclint.kernel.linting.session import LintOptions, LintSession, SessionResult
from speclint.kernel.linting.spec_rules import ALL_SPEC_RULES

__all__ = [
    "ALL_SPEC_RULES",
    "AnalysisOptions",
    "Analyzer",
    "Finding",
    "LintOptions",
    "LintRule",
    "LintSession",
    "RuleContext",
    "RuleScope",
    "SessionResult",
    "Severity",
    "SpecReport",
    "Verdict",
    "render_session",
    "render_spec",
    "run_rules",
    "verdict",
]
