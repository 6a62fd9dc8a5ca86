"""Run the rule catalog against one spec.

Whole-spec rules run first, then each selected platform in declaration
order. In deep mode the declared source is fetched once per spec into a
temporary workspace that is removed when the analysis of that spec ends,
whatever the outcome. Platforms are then analysed concurrently.
"""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from speclint.core.logging import get_logger
from speclint.kernel.exceptions import BuildError, FetchError, SpecParseError
from speclint.kernel.linting.models import Finding, RuleScope, Severity, SpecReport
from speclint.kernel.linting.rules import LintRule, RuleContext, run_rules
from speclint.kernel.linting.spec_rules import ALL_SPEC_RULES
from speclint.kernel.ports.build_invoker import BuildInvoker, BuildOutcome
from speclint.kernel.ports.source_fetcher import SourceFetcher
from speclint.kernel.spec.file_patterns import resolve_patterns
from speclint.kernel.spec.loader import load_spec
from speclint.kernel.spec.models import Specification

logger = get_logger(__name__)

# Ids of findings that do not come from a catalog rule
SPEC_LOADS = "spec_loads"
SOURCE_FETCH = "source_fetch"
BUILD_RUNS = "build_runs"


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    """Options for one analysis.

    Attributes
    ----------
    quick : bool
        Skip every rule that needs the fetched source (no network, no build)
    platforms : frozenset[str] | None
        Restrict per-platform analysis to these ids (None = all declared)
    """

    quick: bool = False
    platforms: frozenset[str] | None = None


class Analyzer:
    """Evaluates the rule catalog against specs.

    Parameters
    ----------
    fetcher : SourceFetcher
        Fetches declared sources in deep mode
    builder : BuildInvoker
        Builds fetched sources per platform in deep mode
    rules : Sequence[LintRule]
        Rule catalog, in evaluation order
    """

    def __init__(
        self,
        fetcher: SourceFetcher,
        builder: BuildInvoker,
        rules: Sequence[LintRule] = ALL_SPEC_RULES,
    ) -> None:
        self.fetcher = fetcher
        self.builder = builder
        self.spec_rules = tuple(r for r in rules if r.scope is RuleScope.WHOLE_SPEC)
        self.static_platform_rules = tuple(
            r for r in rules if r.scope is RuleScope.PER_PLATFORM and not r.requires_fetch
        )
        self.fetch_platform_rules = tuple(
            r for r in rules if r.scope is RuleScope.PER_PLATFORM and r.requires_fetch
        )

    async def analyze_path(self, path: Path, options: AnalysisOptions) -> SpecReport:
        """Load the spec at ``path`` and analyse it.

        A spec that fails to load yields a report with a single whole-spec error.
        """
        try:
            spec = load_spec(path)
        except SpecParseError as e:
            logger.info("Spec {path} failed to load: {reason}", path=path, reason=e.reason)
            identity = f"{path.stem} (?)"
            report = SpecReport(identity, str(path))
            report.add(Finding(identity, SPEC_LOADS, Severity.ERROR, str(e)))
            return report
        return await self.analyze(spec, path, options)

    async def analyze(
        self, spec: Specification, spec_path: Path, options: AnalysisOptions
    ) -> SpecReport:
        """Run the catalog against a loaded spec.

        Returns
        -------
        SpecReport
            Findings ordered whole-spec first, then by platform
        """
        platforms = self._selected_platforms(spec, options)
        report = SpecReport(spec.identity, str(spec_path), platforms)
        report.extend(run_rules(self.spec_rules, RuleContext(spec, spec_path)))

        if options.quick or not platforms or not self.fetch_platform_rules:
            skipped = [r.rule_id for r in self.fetch_platform_rules]
            for platform in platforms:
                ctx = RuleContext(spec, spec_path, platform)
                report.extend(run_rules(self.static_platform_rules, ctx))
                if skipped:
                    report.skipped_rules[platform] = skipped
            if options.quick and platforms and skipped:
                logger.debug(
                    "Quick mode: {rules} not run for {spec}",
                    rules=", ".join(skipped),
                    spec=spec.identity,
                )
            return report

        with tempfile.TemporaryDirectory(prefix="speclint-") as tmp:
            root: Path | None = None
            fetch_error: FetchError | None = None
            try:
                root = await self._fetch(spec, Path(tmp))
            except FetchError as e:
                logger.warning("{spec}: {error}", spec=spec.identity, error=e)
                fetch_error = e

            groups = await asyncio.gather(
                *(
                    self._analyze_platform(spec, spec_path, platform, root, fetch_error)
                    for platform in platforms
                )
            )
        for findings in groups:
            report.extend(findings)
        return report

    def _selected_platforms(self, spec: Specification, options: AnalysisOptions) -> list[str]:
        if options.platforms is None:
            return spec.platform_names
        selected = [p for p in spec.platform_names if p in options.platforms]
        ignored = options.platforms.difference(spec.platform_names)
        if ignored:
            logger.debug(
                "{spec} does not declare {platforms}",
                spec=spec.identity,
                platforms=", ".join(sorted(ignored)),
            )
        return selected

    async def _fetch(self, spec: Specification, workspace: Path) -> Path:
        if spec.source is None or not spec.source.git:
            raise FetchError("<none>", "the spec does not declare a source")
        logger.info("Fetching {location} for {spec}", location=spec.source.git, spec=spec.identity)
        return await self.fetcher.fetch(spec.source, workspace)

    async def _analyze_platform(
        self,
        spec: Specification,
        spec_path: Path,
        platform: str,
        root: Path | None,
        fetch_error: FetchError | None,
    ) -> list[Finding]:
        findings = run_rules(self.static_platform_rules, RuleContext(spec, spec_path, platform))

        if root is None:
            reason = fetch_error.reason if fetch_error else "no source tree"
            findings.append(
                Finding(
                    spec.identity,
                    SOURCE_FETCH,
                    Severity.ERROR,
                    f"Unable to fetch source: {reason}",
                    platform,
                )
            )
            return findings

        patterns = spec.platforms[platform].source_files
        files = resolve_patterns(root, patterns)

        build: BuildOutcome | None = None
        build_error: BuildError | None = None
        if files:
            try:
                build = await self.builder.build(root, platform, files)
            except BuildError as e:
                logger.warning("{spec}: {error}", spec=spec.identity, error=e)
                build_error = e

        ctx = RuleContext(spec, spec_path, platform, tuple(files), build)
        findings.extend(run_rules(self.fetch_platform_rules, ctx))
        if build_error is not None:
            findings.append(
                Finding(
                    spec.identity,
                    BUILD_RUNS,
                    Severity.ERROR,
                    f"Unable to run the build: {build_error.reason}",
                    platform,
                )
            )
        return findings
