"""
Options — the immutable build request and install-location descriptors.

A BuildOptions value is created once from the command line and never
mutated: per-context variants are derived with ``dataclasses.replace``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from csolution_builder.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildOptions:
    """What the user asked for."""

    # Forwarded to the compiler tool
    output: str = ""
    load: str = ""
    schema: bool = True
    update_rte: bool = True
    configuration: str = ""
    context: str = ""
    filter: str = ""
    verbose: bool = False

    # Orchestration switches
    packs: bool = False
    outdir: str = ""
    intdir: str = ""

    # Inherited by the per-project builder
    toolchain: str = ""
    jobs: int = 0
    clean: bool = False
    rebuild: bool = False
    quiet: bool = False
    debug: bool = False

    def check_exclusive(self) -> None:
        """Raise ConfigurationError when context and configuration are both set."""
        if self.context and self.configuration:
            logger.error("options '--context' and '--configuration' cannot be used together")
            raise ConfigurationError(
                "options '--context' and '--configuration' cannot be used together"
            )

    def for_context(self, context: str, outdir: Path, intdir: Path) -> "BuildOptions":
        """A fresh options value for building a single context."""
        return replace(
            self,
            context=context,
            configuration="",
            outdir=str(outdir),
            intdir=str(intdir),
        )


@dataclass(frozen=True)
class InstallConfig:
    """Where the companion binaries live."""

    bin_path: Path
    etc_path: Path
    bin_extn: str = ""

    def binary(self, name: str) -> Path:
        return self.bin_path / f"{name}{self.bin_extn}"
