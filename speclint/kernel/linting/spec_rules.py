"""The rule catalog for package specs.

Rules are evaluated in declaration order. Whole-spec rules run before
per-platform rules; rules flagged ``requires_fetch`` only run in deep mode.
"""

from __future__ import annotations

import re

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from speclint.kernel.linting.models import Finding, RuleScope, Severity
from speclint.kernel.linting.rules import BaseRule, LintRule, RuleContext

# https://semver.org, with the minor and patch parts optional as in
# `1.4` or `2`
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)(\.(0|[1-9]\d*)){0,2}"
    r"(-[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?"
    r"(\+[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*)?$"
)

_GITHUB_RE = re.compile(r"^(\w+://|git@)(www\.)?github\.com[/:]", re.IGNORECASE)

_URL_ADAPTER: TypeAdapter[AnyHttpUrl] = TypeAdapter(AnyHttpUrl)

MAX_SUMMARY_LENGTH = 140


def stub_summary(name: str) -> str:
    """Placeholder summary written by the spec stub generator."""
    return f"A short description of {name}."


# ---------------------------------------------------------------------------
# Whole-spec rules
# ---------------------------------------------------------------------------


class NameMatchesFileRule(BaseRule):
    """The spec name must equal the file base name, case-sensitively."""

    rule_id = "name_matches_file"
    severity = Severity.ERROR
    description = "Spec name differs from the file name"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if ctx.spec.name != ctx.spec_path.stem:
            return [self.finding(ctx, "The name of the spec should match the name of the file")]
        return []


class RequiredAttributesRule(BaseRule):
    """Attributes without which the spec cannot be published."""

    rule_id = "required_attributes"
    severity = Severity.ERROR
    description = "Missing required attribute"

    def check(self, ctx: RuleContext) -> list[Finding]:
        spec = ctx.spec
        present = {
            "name": bool(spec.name),
            "version": bool(spec.version),
            "authors": bool(spec.authors),
            "source": spec.source is not None and bool(spec.source.git),
        }
        return [
            self.finding(ctx, f"Missing required attribute `{attr}`")
            for attr, ok in present.items()
            if not ok
        ]


class VersionIsSemanticRule(BaseRule):
    rule_id = "version_is_semantic"
    severity = Severity.ERROR
    description = "Version is not a semantic version"

    def check(self, ctx: RuleContext) -> list[Finding]:
        version = ctx.spec.version
        # An empty version is reported by required_attributes
        if version and not _SEMVER_RE.match(version):
            return [self.finding(ctx, f"The version `{version}` is not a valid semantic version")]
        return []


class LicensePresentRule(BaseRule):
    """A license needs either a file reference or literal text."""

    rule_id = "license_present"
    severity = Severity.ERROR
    description = "License has neither a file nor text"

    def check(self, ctx: RuleContext) -> list[Finding]:
        license_ = ctx.spec.license
        if license_ is None or not (license_.file or license_.text):
            return [self.finding(ctx, "Missing license[:file] or [:text]")]
        return []


class LicenseTypePresentRule(BaseRule):
    rule_id = "license_type_present"
    severity = Severity.WARNING
    description = "License has no type"

    def check(self, ctx: RuleContext) -> list[Finding]:
        license_ = ctx.spec.license
        if license_ is None or not license_.type:
            return [self.finding(ctx, "Missing license[:type]")]
        return []


class SummaryPresentRule(BaseRule):
    rule_id = "summary_present"
    severity = Severity.WARNING
    description = "Summary is missing or still the stub placeholder"

    def check(self, ctx: RuleContext) -> list[Finding]:
        summary = ctx.spec.summary.strip()
        if not summary:
            return [self.finding(ctx, "Missing summary")]
        if summary == stub_summary(ctx.spec.name):
            return [self.finding(ctx, "The summary is not meaningful")]
        return []


class SummaryLengthRule(BaseRule):
    rule_id = "summary_length"
    severity = Severity.WARNING
    description = "Summary is too long"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if len(ctx.spec.summary.strip()) > MAX_SUMMARY_LENGTH:
            return [
                self.finding(
                    ctx, f"The summary should be short (at most {MAX_SUMMARY_LENGTH} characters)"
                )
            ]
        return []


class DescriptionDiffersRule(BaseRule):
    rule_id = "description_differs"
    severity = Severity.WARNING
    description = "Description repeats the summary"

    def check(self, ctx: RuleContext) -> list[Finding]:
        summary = ctx.spec.summary.strip()
        if summary and ctx.spec.description.strip() == summary:
            return [self.finding(ctx, "The description is equal to the summary")]
        return []


class HomepageFormatRule(BaseRule):
    """The homepage must be a well-formed http(s) URL."""

    rule_id = "homepage_reachable_format"
    severity = Severity.WARNING
    description = "Homepage is missing or not a valid URL"

    def check(self, ctx: RuleContext) -> list[Finding]:
        homepage = ctx.spec.homepage.strip()
        if not homepage:
            return [self.finding(ctx, "Missing homepage")]
        try:
            _URL_ADAPTER.validate_python(homepage)
        except PydanticValidationError:
            return [self.finding(ctx, f"The homepage `{homepage}` is not a valid URL")]
        return []


class SourceReferenceRule(BaseRule):
    rule_id = "source_reference"
    severity = Severity.ERROR
    description = "Source does not pin exactly one tag, commit or branch"

    def check(self, ctx: RuleContext) -> list[Finding]:
        source = ctx.spec.source
        if source is None or not source.git:
            return []
        if len(source.references) != 1:
            return [
                self.finding(
                    ctx,
                    "The source should specify exactly one of "
                    "source[:tag], source[:commit] or source[:branch]",
                )
            ]
        return []


class GithubSourceUrlRule(BaseRule):
    rule_id = "github_source_url"
    severity = Severity.WARNING
    description = "GitHub source URL is not a canonical https clone URL"

    def check(self, ctx: RuleContext) -> list[Finding]:
        source = ctx.spec.source
        if source is None or not source.git or not _GITHUB_RE.match(source.git):
            return []
        findings = []
        if not source.git.lower().startswith("https://"):
            findings.append(self.finding(ctx, "GitHub repositories should use an `https` link"))
        if not source.git.endswith(".git"):
            findings.append(self.finding(ctx, "GitHub repositories should end in `.git`"))
        return findings


class PlatformsDeclaredRule(BaseRule):
    rule_id = "platforms_declared"
    severity = Severity.ERROR
    description = "No platform declared"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if not ctx.spec.platforms:
            return [self.finding(ctx, "The spec does not declare any platform")]
        return []


# ---------------------------------------------------------------------------
# Per-platform rules
# ---------------------------------------------------------------------------


class ArcCompilerFlagRule(BaseRule):
    """ARC must be requested through ``requires_arc``, not a raw compiler flag."""

    rule_id = "arc_compiler_flag"
    severity = Severity.WARNING
    scope = RuleScope.PER_PLATFORM
    description = "ARC enabled through compiler_flags"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if "-fobjc-arc" in ctx.platform_spec.compiler_flags:
            return [self.finding(ctx, "Use requires_arc instead of -fobjc-arc in compiler_flags")]
        return []


class SourceFilesPresentRule(BaseRule):
    rule_id = "source_files_present"
    severity = Severity.ERROR
    scope = RuleScope.PER_PLATFORM
    requires_fetch = True
    description = "source_files patterns match nothing in the fetched source"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if ctx.files is None:
            return []
        if not ctx.files:
            patterns = ", ".join(ctx.platform_spec.source_files) or "<none>"
            return [
                self.finding(ctx, f"The source_files pattern did not match any file ({patterns})")
            ]
        return []


class BuildSucceedsRule(BaseRule):
    rule_id = "build_succeeds"
    severity = Severity.ERROR
    scope = RuleScope.PER_PLATFORM
    requires_fetch = True
    description = "Build against the fetched source failed"

    def check(self, ctx: RuleContext) -> list[Finding]:
        build = ctx.build
        if build is None or build.succeeded:
            return []
        if build.errors:
            return [self.finding(ctx, f"[build] {line}") for line in build.errors]
        return [self.finding(ctx, f"Build failed with exit status {build.returncode}")]


class BuildWarningsRule(BaseRule):
    rule_id = "build_warnings"
    severity = Severity.WARNING
    scope = RuleScope.PER_PLATFORM
    requires_fetch = True
    description = "Build against the fetched source emitted warnings"

    def check(self, ctx: RuleContext) -> list[Finding]:
        if ctx.build is None:
            return []
        return [self.finding(ctx, f"[build] {line}") for line in ctx.build.warnings]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

ALL_SPEC_RULES: tuple[LintRule, ...] = (
    NameMatchesFileRule(),
    RequiredAttributesRule(),
    VersionIsSemanticRule(),
    LicensePresentRule(),
    LicenseTypePresentRule(),
    SummaryPresentRule(),
    SummaryLengthRule(),
    DescriptionDiffersRule(),
    HomepageFormatRule(),
    SourceReferenceRule(),
    GithubSourceUrlRule(),
    PlatformsDeclaredRule(),
    ArcCompilerFlagRule(),
    SourceFilesPresentRule(),
    BuildSucceedsRule(),
    BuildWarningsRule(),
)

WHOLE_SPEC_RULES: tuple[LintRule, ...] = tuple(
    r for r in ALL_SPEC_RULES if r.scope is RuleScope.WHOLE_SPEC
)
PLATFORM_RULES: tuple[LintRule, ...] = tuple(
    r for r in ALL_SPEC_RULES if r.scope is RuleScope.PER_PLATFORM
)


def get_rule(rule_id: str) -> LintRule:
    """Look up a catalog rule by id.

    Raises
    ------
    KeyError
        If no rule has that id
    """
    for rule in ALL_SPEC_RULES:
        if rule.rule_id == rule_id:
            return rule
    raise KeyError(rule_id)
