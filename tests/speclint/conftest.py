"""Shared fixtures for speclint tests.

Provides spec-file factories and fake collaborators so that no test touches
the network or a real toolchain (except the driver tests, which use local
git repositories and shell commands).
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from speclint.kernel.exceptions import BuildError, FetchError
from speclint.kernel.ports.build_invoker import BuildOutcome
from speclint.kernel.spec.models import Source

BANANAS: dict[str, Any] = {
    "name": "Bananas",
    "version": "0.0.1",
    "summary": "Bananas are yellow and delicious.",
    "description": "A longer description of everything Bananas offers.",
    "homepage": "http://example.com/Bananas",
    "license": {"type": "MIT", "file": "LICENSE"},
    "authors": {"Jane Doe": "jane@example.com"},
    "source": {"git": "https://example.com/Bananas.git", "tag": "0.0.1"},
    "platforms": {"ios": {"source_files": ["Classes", "Classes/**/*.{h,m}"]}},
}


def spec_data(**overrides: Any) -> dict[str, Any]:
    """A valid spec mapping with top-level keys replaced (None removes a key)."""
    data = copy.deepcopy(BANANAS)
    for key, value in overrides.items():
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
    return data


@pytest.fixture
def make_spec(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing ``<file_name>.pkgspec`` under ``tmp_path`` (or ``directory``)."""

    def _make(
        file_name: str = "Bananas",
        directory: Path | None = None,
        **overrides: Any,
    ) -> Path:
        target = directory or tmp_path
        target.mkdir(parents=True, exist_ok=True)
        path = target / f"{file_name}.pkgspec"
        path.write_text(yaml.safe_dump(spec_data(**overrides), sort_keys=False))
        return path

    return _make


class FakeFetcher:
    """SourceFetcher writing a fixed file tree, or failing for chosen URLs."""

    def __init__(
        self,
        files: list[str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.files = files if files is not None else ["Classes/Bananas.h", "Classes/Bananas.m"]
        self.failing = failing or set()
        self.calls: list[str] = []
        self.workspaces: list[Path] = []

    async def fetch(self, source: Source, destination: Path) -> Path:
        self.calls.append(source.location)
        self.workspaces.append(destination)
        if source.location in self.failing:
            raise FetchError(source.location, "repository not found")
        root = destination / "source"
        for name in self.files:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("// source\n")
        root.mkdir(parents=True, exist_ok=True)
        return root


class FakeBuilder:
    """BuildInvoker returning a canned outcome per platform."""

    def __init__(
        self,
        outcomes: dict[str, BuildOutcome | None] | None = None,
        broken: set[str] | None = None,
    ) -> None:
        self.outcomes = outcomes or {}
        self.broken = broken or set()
        self.calls: list[tuple[str, int]] = []

    async def build(self, workspace: Path, platform: str, files: list[Path]) -> BuildOutcome | None:
        self.calls.append((platform, len(files)))
        if platform in self.broken:
            raise BuildError(platform, "toolchain not found")
        return self.outcomes.get(platform, BuildOutcome())


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def builder() -> FakeBuilder:
    return FakeBuilder()


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture
def make_builder() -> Callable[..., FakeBuilder]:
    return FakeBuilder


@pytest.fixture(name="spec_data")
def spec_data_fixture() -> Callable[..., dict[str, Any]]:
    return spec_data
