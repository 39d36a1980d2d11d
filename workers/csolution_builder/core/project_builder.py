"""
Project builder — the per-context delegate that builds one descriptor.

The orchestrator only needs something with a ``build(descriptor,
options)`` method; CprjBuilder is the default, driving cbuildgen and
CMake the way a single-project build would.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Protocol

from csolution_builder.core.errors import ToolNotFound
from csolution_builder.core.tool_runner import ToolRunner, locate_tool
from csolution_builder.policy.options import BuildOptions, InstallConfig

logger = logging.getLogger(__name__)

CBUILDGEN = "cbuildgen"


class ProjectBuilder(Protocol):
    def build(self, descriptor: Path, options: BuildOptions) -> None:
        ...


class CprjBuilder:
    """Builds a generated .cprj with cbuildgen + CMake."""

    def __init__(self, runner: ToolRunner, install_config: InstallConfig):
        self.runner = runner
        self.install_config = install_config

    def _cbuildgen_args(self, options: BuildOptions) -> List[str]:
        args = []
        if options.outdir:
            args.append(f"--outdir={options.outdir}")
        if options.intdir:
            args.append(f"--intdir={options.intdir}")
        if options.toolchain:
            args.append(f"--toolchain={options.toolchain}")
        if options.quiet:
            args.append("--quiet")
        return args

    def _cmake(self) -> str:
        cmake = shutil.which("cmake")
        if cmake is None:
            logger.error("cmake was not found in PATH")
            raise ToolNotFound("cmake", "PATH")
        return cmake

    def build(self, descriptor: Path, options: BuildOptions) -> None:
        cbuildgen = str(locate_tool(self.install_config, CBUILDGEN))
        cbuildgen_args = self._cbuildgen_args(options)

        if options.clean or options.rebuild:
            logger.info("Cleaning: %s", descriptor)
            self.runner.execute(cbuildgen, options.quiet, str(descriptor), "clean", *cbuildgen_args)
            if options.clean:
                return

        self.runner.execute(cbuildgen, options.quiet, str(descriptor), "cmake", *cbuildgen_args)

        cmake = self._cmake()
        build_dir = options.intdir or str(descriptor.parent)
        self.runner.execute(cmake, options.quiet, "-S", build_dir, "-B", build_dir)

        build_args = ["--build", build_dir]
        if options.jobs > 0:
            build_args.append(f"-j{options.jobs}")
        if options.debug:
            build_args.append("--verbose")
        self.runner.execute(cmake, options.quiet, *build_args)
