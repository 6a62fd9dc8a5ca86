"""Source fetcher driver that clones git repositories.

This driver implements the :class:`~speclint.kernel.ports.SourceFetcher`
protocol by shelling out to ``git``. The blocking subprocess runs in the
default executor so several specs can be fetched concurrently.
"""

from __future__ import annotations

import asyncio
import subprocess  # nosec B404
from functools import partial
from pathlib import Path

from speclint.core.logging import get_logger
from speclint.kernel.exceptions import FetchError
from speclint.kernel.spec.models import Source

logger = get_logger(__name__)


class GitSourceFetcher:
    """SourceFetcher driver backed by the git command line.

    Parameters
    ----------
    git_executable : str
        Git binary to run (default: ``git``).
    timeout : float
        Seconds allowed for the whole fetch (default: 300.0).

    Examples
    --------
    Basic usage::

        fetcher = GitSourceFetcher(timeout=60.0)
        root = await fetcher.fetch(spec.source, Path(tmp))
    """

    def __init__(self, git_executable: str = "git", timeout: float = 300.0) -> None:
        self.git_executable = git_executable
        self.timeout = timeout

    async def fetch(self, source: Source, destination: Path) -> Path:
        """Clone ``source`` into ``destination/source`` and check out its reference."""
        if not source.git:
            raise FetchError("<none>", "the spec does not declare a git source")

        checkout = destination / "source"
        refs = source.references
        location = source.git

        if "commit" in refs:
            await self._git(location, "clone", "--quiet", location, str(checkout))
            await self._git(location, "-C", str(checkout), "checkout", "--quiet", refs["commit"])
        else:
            ref = refs.get("tag") or refs.get("branch")
            args = ["clone", "--quiet", "--depth", "1"]
            if ref:
                args += ["--branch", ref]
            await self._git(location, *args, location, str(checkout))

        logger.debug("Fetched {location} into {path}", location=location, path=checkout)
        return checkout

    async def _git(self, location: str, *args: str) -> None:
        cmd = [self.git_executable, *args]
        run = partial(
            subprocess.run,  # nosec B603
            cmd,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )
        try:
            result = await asyncio.get_running_loop().run_in_executor(None, run)
        except subprocess.TimeoutExpired as e:
            raise FetchError(location, f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise FetchError(location, str(e)) from e

        if result.returncode != 0:
            detail = result.stderr.strip().splitlines()
            raise FetchError(location, detail[-1] if detail else f"git exited {result.returncode}")
