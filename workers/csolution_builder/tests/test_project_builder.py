"""
test_project_builder — the default cbuildgen + CMake delegate.
"""
from pathlib import Path

import pytest

from csolution_builder.core import project_builder as pb
from csolution_builder.core.errors import ToolExecutionError, ToolNotFound
from csolution_builder.core.project_builder import CprjBuilder
from csolution_builder.policy.options import BuildOptions

DESCRIPTOR = Path("/work/App/App.Debug+Board.cprj")


@pytest.fixture
def cmake_on_path(monkeypatch):
    monkeypatch.setattr(pb.shutil, "which", lambda name: "/usr/bin/cmake")


class TestCprjBuilder:

    def _options(self, **kw):
        return BuildOptions(outdir="/o", intdir="/i", **kw)

    def test_generate_configure_build(self, make_runner, install_config, cmake_on_path):
        runner = make_runner()
        CprjBuilder(runner, install_config).build(DESCRIPTOR, self._options(jobs=4, toolchain="GCC"))

        assert [args for _, _, args in runner.calls] == [
            (str(DESCRIPTOR), "cmake", "--outdir=/o", "--intdir=/i", "--toolchain=GCC"),
            ("-S", "/i", "-B", "/i"),
            ("--build", "/i", "-j4"),
        ]
        assert runner.calls[0][0] == str(install_config.bin_path / "cbuildgen")

    def test_debug_verbose_and_default_build_dir(self, make_runner, install_config, cmake_on_path):
        runner = make_runner()
        CprjBuilder(runner, install_config).build(DESCRIPTOR, BuildOptions(debug=True))

        build_dir = str(DESCRIPTOR.parent)
        assert [args for _, _, args in runner.calls] == [
            (str(DESCRIPTOR), "cmake"),
            ("-S", build_dir, "-B", build_dir),
            ("--build", build_dir, "--verbose"),
        ]
        assert "--debug" not in runner.calls[0][2]
        assert "build" not in runner.calls[0][2]

    def test_clean_only(self, make_runner, install_config, cmake_on_path):
        runner = make_runner()
        CprjBuilder(runner, install_config).build(DESCRIPTOR, self._options(clean=True))
        assert runner.keys() == [f"{DESCRIPTOR} clean"]

    def test_rebuild_cleans_first(self, make_runner, install_config, cmake_on_path):
        runner = make_runner()
        CprjBuilder(runner, install_config).build(DESCRIPTOR, self._options(rebuild=True))
        assert runner.keys()[:2] == [f"{DESCRIPTOR} clean", f"{DESCRIPTOR} cmake"]

    def test_quiet_forwarded(self, make_runner, install_config, cmake_on_path):
        runner = make_runner()
        CprjBuilder(runner, install_config).build(DESCRIPTOR, self._options(quiet=True))
        assert all(quiet for _, quiet, _ in runner.calls)
        assert "--quiet" in runner.calls[0][2]

    def test_generation_failure(self, make_runner, install_config, cmake_on_path):
        runner = make_runner(failures={f"{DESCRIPTOR} cmake"})
        with pytest.raises(ToolExecutionError):
            CprjBuilder(runner, install_config).build(DESCRIPTOR, self._options())
        assert len(runner.calls) == 1

    def test_cmake_missing(self, make_runner, install_config, monkeypatch):
        monkeypatch.setattr(pb.shutil, "which", lambda name: None)
        with pytest.raises(ToolNotFound):
            CprjBuilder(make_runner(), install_config).build(DESCRIPTOR, self._options())

    def test_cbuildgen_missing(self, make_runner, install_config, cmake_on_path):
        (install_config.bin_path / "cbuildgen").unlink()
        with pytest.raises(ToolNotFound):
            CprjBuilder(make_runner(), install_config).build(DESCRIPTOR, self._options())
