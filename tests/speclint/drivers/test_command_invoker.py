"""Tests for CommandBuildInvoker."""

from __future__ import annotations

import sys

import pytest

from speclint.drivers.build_invoker import (
    CommandBuildInvoker,
    parse_compiler_output,
    render_command,
)
from speclint.kernel.exceptions import BuildError
from speclint.kernel.ports.build_invoker import BuildInvoker

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell")


def test_protocol_conformance() -> None:
    assert isinstance(CommandBuildInvoker(), BuildInvoker)


def test_parse_compiler_output() -> None:
    output = (
        "Compiling Bananas.m\n"
        "Bananas.m:3:1: error: unknown type name 'Banan'\n"
        "Bananas.m:9:5: warning: unused variable 'peel'\n"
        "Bananas.m:3:1: error: unknown type name 'Banan'\n"
        "1 error generated.\n"
    )
    errors, warnings = parse_compiler_output(output)
    assert errors == ("Bananas.m:3:1: error: unknown type name 'Banan'",)
    assert warnings == ("Bananas.m:9:5: warning: unused variable 'peel'",)


@pytest.mark.asyncio
async def test_unconfigured_platform_is_not_built(tmp_path) -> None:
    assert await CommandBuildInvoker({"osx": "true"}).build(tmp_path, "ios", []) is None


@pytest.mark.asyncio
async def test_successful_build(tmp_path) -> None:
    source = tmp_path / "a.m"
    source.write_text("")
    invoker = CommandBuildInvoker({"ios": "test -f {files} && echo built for {platform}"})
    outcome = await invoker.build(tmp_path, "ios", [source])
    assert outcome is not None
    assert outcome.succeeded
    assert outcome.errors == ()


@pytest.mark.asyncio
async def test_failed_build_collects_output(tmp_path) -> None:
    command = "echo 'a.m:1: error: boom' >&2; echo 'a.m:2: warning: hmm'; exit 1"
    outcome = await CommandBuildInvoker({"ios": command}).build(tmp_path, "ios", [])
    assert outcome is not None
    assert not outcome.succeeded
    assert outcome.returncode == 1
    assert outcome.errors == ("a.m:1: error: boom",)
    assert outcome.warnings == ("a.m:2: warning: hmm",)


@pytest.mark.asyncio
async def test_timeout_is_a_build_error(tmp_path) -> None:
    invoker = CommandBuildInvoker({"ios": "exec sleep 5"}, timeout=0.2)
    with pytest.raises(BuildError, match="timed out"):
        await invoker.build(tmp_path, "ios", [])


def test_render_command_only_fills_known_placeholders() -> None:
    template = "cc {files} && echo ${HOME} {a,b} {unknown} {platform}"
    assert render_command(template, files="a.m b.m", platform="ios") == (
        "cc a.m b.m && echo ${HOME} {a,b} {unknown} ios"
    )


@pytest.mark.asyncio
async def test_shell_braces_reach_the_shell(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SPECLINT_BUILD_MARKER", "kept")
    command = "test \"${SPECLINT_BUILD_MARKER}\" = kept || echo 'x: error: lost variable'"
    outcome = await CommandBuildInvoker({"ios": command}).build(tmp_path, "ios", [])
    assert outcome is not None
    assert outcome.succeeded
    assert outcome.errors == ()
