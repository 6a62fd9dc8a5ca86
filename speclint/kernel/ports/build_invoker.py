"""Port interface for building a fetched source tree for one platform."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class BuildOutcome(BaseModel):
    """Result of a platform build.

    Attributes
    ----------
    returncode : int
        Exit status of the toolchain
    errors : tuple[str, ...]
        Compiler error lines, in output order
    warnings : tuple[str, ...]
        Compiler warning lines, in output order
    """

    model_config = ConfigDict(frozen=True)

    returncode: int = 0
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and not self.errors


@runtime_checkable
class BuildInvoker(Protocol):
    """Port interface for build invokers."""

    async def build(self, workspace: Path, platform: str, files: list[Path]) -> BuildOutcome | None:
        """Build ``files`` of the source tree at ``workspace`` for ``platform``.

        Returns
        -------
        BuildOutcome | None
            The build result, or None when no build is configured for the platform

        Raises
        ------
        BuildError
            If the toolchain cannot be started or times out
        """
        ...
