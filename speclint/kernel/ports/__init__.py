"""Port interfaces consumed by the analyzer."""

from speclint.kernel.ports.build_invoker import BuildInvoker, BuildOutcome
from speclint.kernel.ports.source_fetcher import SourceFetcher

__all__ = [
    "BuildInvoker",
    "BuildOutcome",
    "SourceFetcher",
]
