"""One linting run over one or more spec inputs.

Inputs are resolved to spec paths up front; a run that cannot resolve any
input fails with ConfigurationError before anything is analysed. Specs are
then analysed concurrently with a bounded worker count, and the combined
report keeps the input order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from speclint.core.logging import get_logger
from speclint.drivers.build_invoker import CommandBuildInvoker
from speclint.drivers.source_fetcher import GitSourceFetcher
from speclint.kernel.config.models import SpecLintConfig
from speclint.kernel.exceptions import ConfigurationError, LintFailedError
from speclint.kernel.linting.analyzer import AnalysisOptions, Analyzer
from speclint.kernel.linting.models import SpecReport, Verdict, verdict
from speclint.kernel.linting.report import render_session
from speclint.kernel.ports.build_invoker import BuildInvoker
from speclint.kernel.ports.source_fetcher import SourceFetcher
from speclint.kernel.spec.loader import SPEC_EXTENSION

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LintOptions:
    """Run-wide lint options.

    Attributes
    ----------
    quick : bool
        Static checks only: nothing is fetched or built
    only_errors : bool
        Hide warnings from the rendered report (the verdict is unaffected)
    platforms : frozenset[str] | None
        Restrict per-platform analysis to these ids
    max_workers : int | None
        Concurrent spec analyses (None = the configured value)
    """

    quick: bool = False
    only_errors: bool = False
    platforms: frozenset[str] | None = None
    max_workers: int | None = None

    @property
    def analysis(self) -> AnalysisOptions:
        return AnalysisOptions(quick=self.quick, platforms=self.platforms)


@dataclass(frozen=True, slots=True)
class SessionResult:
    """Outcome of a lint run."""

    reports: tuple[SpecReport, ...]
    report: str
    verdict: Verdict

    @property
    def exit_status(self) -> int:
        return 0 if self.verdict is Verdict.PASS else 1

    def raise_for_verdict(self) -> None:
        """Raise LintFailedError carrying the report if the run failed.

        Raises
        ------
        LintFailedError
            If any spec produced an error finding
        """
        if self.verdict is Verdict.FAIL:
            raise LintFailedError(self.report)


def _discover(directory: Path) -> list[Path]:
    return sorted(p for p in directory.rglob(f"*{SPEC_EXTENSION}") if p.is_file())


class LintSession:
    """Orchestrates a lint run.

    Parameters
    ----------
    config : SpecLintConfig
        Parsed configuration (repository root, timeouts, build commands)
    cwd : Path
        Directory relative inputs and the empty selector are resolved against
    fetcher : SourceFetcher | None
        Source fetcher; defaults to git with the configured timeout
    builder : BuildInvoker | None
        Build invoker; defaults to the configured build commands
    """

    def __init__(
        self,
        config: SpecLintConfig,
        cwd: Path,
        fetcher: SourceFetcher | None = None,
        builder: BuildInvoker | None = None,
    ) -> None:
        self.config = config
        self.cwd = cwd
        self.analyzer = Analyzer(
            fetcher
            or GitSourceFetcher(git_executable=config.git_executable, timeout=config.fetch_timeout),
            builder or CommandBuildInvoker(config.build_commands, timeout=config.build_timeout),
        )

    def resolve_inputs(self, inputs: Sequence[str]) -> list[Path]:
        """Turn CLI inputs into an ordered, de-duplicated list of spec paths.

        Each input is a spec file, a directory searched recursively, or the
        name of a repository under ``config.repos_dir``. No input means the
        spec files in ``cwd``.

        Raises
        ------
        ConfigurationError
            If an input cannot be resolved or resolves to no spec
        """
        if not inputs:
            found = sorted(p for p in self.cwd.glob(f"*{SPEC_EXTENSION}") if p.is_file())
            if not found:
                raise ConfigurationError(
                    "lint",
                    f"no {SPEC_EXTENSION} file found in {self.cwd}; "
                    "pass a spec file, a directory or a repository name",
                )
            return found

        resolved: dict[Path, None] = {}
        for item in inputs:
            for path in self._resolve_one(item):
                resolved.setdefault(path, None)
        return list(resolved)

    def _resolve_one(self, item: str) -> list[Path]:
        path = Path(item).expanduser()
        if not path.is_absolute():
            path = self.cwd / path

        if path.is_file():
            return [path]
        if path.is_dir():
            found = _discover(path)
            if not found:
                raise ConfigurationError("lint", f"no {SPEC_EXTENSION} file found in {path}")
            return found

        if self.config.repos_dir:
            repo = Path(self.config.repos_dir) / item
            if repo.is_dir():
                found = _discover(repo)
                if not found:
                    raise ConfigurationError("lint", f"the repository `{item}` holds no spec")
                logger.info("Linting repository {repo}", repo=repo)
                return found

        raise ConfigurationError(
            "lint", f"unable to find a spec file, directory or repository named `{item}`"
        )

    async def arun(self, inputs: Sequence[str], options: LintOptions) -> SessionResult:
        """Lint every resolved spec and build the combined report."""
        paths = self.resolve_inputs(inputs)
        workers = options.max_workers or self.config.max_workers
        semaphore = asyncio.Semaphore(workers)
        analysis = options.analysis
        logger.info(
            "Linting {count} spec(s) with {workers} worker(s){mode}",
            count=len(paths),
            workers=workers,
            mode=" in quick mode" if options.quick else "",
        )

        async def analyze_with_limit(path: Path) -> SpecReport:
            async with semaphore:
                return await self.analyzer.analyze_path(path, analysis)

        # gather returns results in argument order, whatever the completion order
        reports = tuple(await asyncio.gather(*(analyze_with_limit(p) for p in paths)))

        return SessionResult(
            reports=reports,
            report=render_session(reports, only_errors=options.only_errors),
            verdict=verdict(f for r in reports for f in r.findings),
        )

    def run(self, inputs: Sequence[str], options: LintOptions | None = None) -> SessionResult:
        """Synchronous entry point around :meth:`arun`."""
        return asyncio.run(self.arun(inputs, options or LintOptions()))
