"""Build invoker driver that runs a configured toolchain command per platform.

The command template comes from ``[tool.speclint.build]`` and may use the
placeholders ``{workspace}``, ``{platform}`` and ``{files}``. Compiler output
lines containing ``error:`` or ``warning:`` are collected into the outcome.
"""

from __future__ import annotations

import asyncio
import re
import shlex
import subprocess  # nosec B404
from functools import partial
from pathlib import Path

from speclint.core.logging import get_logger
from speclint.kernel.exceptions import BuildError
from speclint.kernel.ports.build_invoker import BuildOutcome

logger = get_logger(__name__)

_ERROR_RE = re.compile(r"\berror:", re.IGNORECASE)
_WARNING_RE = re.compile(r"\bwarning:", re.IGNORECASE)


def parse_compiler_output(output: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split toolchain output into (errors, warnings), de-duplicated in order."""
    errors: dict[str, None] = {}
    warnings: dict[str, None] = {}
    for raw in output.splitlines():
        line = raw.strip()
        if _ERROR_RE.search(line):
            errors[line] = None
        elif _WARNING_RE.search(line):
            warnings[line] = None
    return tuple(errors), tuple(warnings)


def render_command(template: str, **values: str) -> str:
    """Fill the ``{name}`` placeholders of ``template`` with ``values``.

    Any other brace (shell ``${VAR}``, ``{a,b}`` expansions) is left as written.

    >>> render_command("echo ${HOME} {platform}", platform="ios")
    'echo ${HOME} ios'
    """
    command = template
    for name, value in values.items():
        command = command.replace(f"{{{name}}}", value)
    return command


class CommandBuildInvoker:
    """BuildInvoker driver running a shell command template.

    Parameters
    ----------
    commands : dict[str, str]
        Platform id -> command template. Platforms without an entry are not built.
    timeout : float
        Seconds allowed for one build (default: 600.0).

    Examples
    --------
    Syntax-check C sources with clang::

        invoker = CommandBuildInvoker({"osx": "clang -fsyntax-only {files}"})
    """

    def __init__(self, commands: dict[str, str] | None = None, timeout: float = 600.0) -> None:
        self.commands = dict(commands or {})
        self.timeout = timeout

    async def build(self, workspace: Path, platform: str, files: list[Path]) -> BuildOutcome | None:
        template = self.commands.get(platform)
        if template is None:
            logger.debug("No build command configured for {platform}", platform=platform)
            return None

        command = render_command(
            template,
            workspace=shlex.quote(str(workspace)),
            platform=shlex.quote(platform),
            files=" ".join(shlex.quote(str(f)) for f in files),
        )
        run = partial(
            subprocess.run,  # nosec B602
            command,
            shell=True,
            cwd=workspace,
            capture_output=True,
            text=True,
            timeout=self.timeout,
            check=False,
        )
        try:
            result = await asyncio.get_running_loop().run_in_executor(None, run)
        except subprocess.TimeoutExpired as e:
            raise BuildError(platform, f"timed out after {self.timeout:g}s") from e
        except OSError as e:
            raise BuildError(platform, str(e)) from e

        errors, warnings = parse_compiler_output(f"{result.stdout}\n{result.stderr}")
        logger.debug(
            "Build for {platform} exited {code} ({errors} errors, {warnings} warnings)",
            platform=platform,
            code=result.returncode,
            errors=len(errors),
            warnings=len(warnings),
        )
        return BuildOutcome(returncode=result.returncode, errors=errors, warnings=warnings)
