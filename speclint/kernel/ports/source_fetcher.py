"""Port interface for fetching the declared source of a spec.

Deep linting fetches the source into a transient workspace before the
fetch-dependent rules run. Implementations are network-bound and may fail.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from speclint.kernel.spec.models import Source


@runtime_checkable
class SourceFetcher(Protocol):
    """Port interface for source fetchers."""

    async def fetch(self, source: Source, destination: Path) -> Path:
        """Fetch ``source`` into ``destination``.

        Parameters
        ----------
        source : Source
            Declared source location and reference
        destination : Path
            Empty directory owned by the caller

        Returns
        -------
        Path
            Root of the fetched source tree

        Raises
        ------
        FetchError
            If the source cannot be fetched
        """
        ...
