"""
Shared pytest fixtures for csolution_builder tests.

No real csolution/cpackget/cbuildgen is needed: the install bin
directory holds empty placeholder files (so binary lookup succeeds) and
a FakeRunner returns scripted tool output while recording every call.
"""
from __future__ import annotations

import os
import textwrap
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from csolution_builder.core.errors import ToolExecutionError
from csolution_builder.policy.options import BuildOptions, InstallConfig

CATALOG_YML_ORDER = "App.Debug+Board\r\nApp.Release+Board\r\nBoot+Board\r\n"

INDEX_YML = textwrap.dedent("""\
    build-idx:
      generated-by: csolution version 2.0.0
      csolution: MySolution.csolution.yml
      cbuilds:
        - cbuild: App/App.Debug+Board.cbuild.yml
          project: App
          configuration: .Debug+Board
        - cbuild: App/App.Release+Board.cbuild.yml
          project: App
          configuration: .Release+Board
        - cbuild: Boot/Boot+Board.cbuild.yml
          project: Boot
          configuration: +Board
""")


def command_key(args: Tuple[str, ...]) -> str:
    """
    Key a tool invocation by its positional words.

    ``list contexts --solution=x --yml-order`` → ``list contexts``
    ``list packs --solution=x -m``            → ``list packs -m``
    """
    return " ".join(a for a in args if not a.startswith("--"))


class FakeRunner:
    """Records invocations and replays scripted stdout per command key."""

    def __init__(
        self,
        outputs: Optional[Dict[str, str]] = None,
        failures: Optional[Set[str]] = None,
    ):
        self.outputs = dict(outputs or {})
        self.failures = set(failures or ())
        self.calls: List[Tuple[str, bool, Tuple[str, ...]]] = []

    def execute(self, binary: str, quiet: bool, *args: str) -> str:
        self.calls.append((binary, quiet, args))
        key = command_key(args)
        if key in self.failures:
            raise ToolExecutionError(
                f"'{Path(binary).name} {key}' exited with code 1",
                command=[binary, *args],
                returncode=1,
            )
        return self.outputs.get(key, "")

    def keys(self) -> List[str]:
        return [command_key(args) for _, _, args in self.calls]

    def calls_to(self, name: str) -> List[Tuple[str, ...]]:
        return [args for binary, _, args in self.calls if Path(binary).name == name]


class RecordingProjectBuilder:
    """Project builder that records descriptors and can fail on one of them."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.built: List[Tuple[Path, BuildOptions]] = []

    def build(self, descriptor: Path, options: BuildOptions) -> None:
        self.built.append((descriptor, options))
        if self.fail_on and self.fail_on in descriptor.name:
            raise ToolExecutionError(f"build of {descriptor.name} failed", returncode=2)


@pytest.fixture
def install_config(tmp_path) -> InstallConfig:
    """Install tree with placeholder csolution, cpackget and cbuildgen."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name in ("csolution", "cpackget", "cbuildgen"):
        (bin_dir / name).write_text("")
    etc_dir = tmp_path / "etc"
    etc_dir.mkdir()
    return InstallConfig(bin_path=bin_dir, etc_path=etc_dir, bin_extn="")


@pytest.fixture
def solution_dir(tmp_path) -> Path:
    """A solution directory containing the index written by ``convert``."""
    d = tmp_path / "solution"
    d.mkdir()
    (d / "MySolution.csolution.yml").write_text("solution:\n  projects: []\n")
    (d / "MySolution.cbuild-idx.yml").write_text(INDEX_YML)
    return d


@pytest.fixture
def solution_file(solution_dir) -> str:
    return str(solution_dir / "MySolution.csolution.yml")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(outputs={"list contexts": CATALOG_YML_ORDER})


@pytest.fixture
def project_builder() -> RecordingProjectBuilder:
    return RecordingProjectBuilder()


@pytest.fixture
def make_runner():
    """The FakeRunner class, for tests that script their own outputs."""
    return FakeRunner


@pytest.fixture
def make_project_builder():
    return RecordingProjectBuilder


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep environment edits made by update_env_vars inside one test."""
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.delenv("CMSIS_BUILD_ROOT", raising=False)
    monkeypatch.delenv("CMSIS_COMPILER_ROOT", raising=False)


@pytest.fixture
def catalog_output() -> str:
    """Raw ``list contexts --yml-order`` output for the solution fixture."""
    return CATALOG_YML_ORDER
