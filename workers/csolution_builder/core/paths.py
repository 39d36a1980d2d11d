"""
Paths — deterministic file and directory layout of a solution build.

    <base>/<name>.cbuild-idx.yml                  index document
    <descriptor dir>/out/<project>[/<build>]/<target>   output dir
    <descriptor dir>/tmp/<project>[/<build>]/<target>   intermediate dir
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

from csolution_builder import INDEX_SUFFIX
from csolution_builder.core.context import ContextItem
from csolution_builder.core.errors import FormatError

logger = logging.getLogger(__name__)

OUT_DIR = "out"
TMP_DIR = "tmp"


def solution_name_tokens(input_file: str) -> List[str]:
    """
    Split the solution file name into ``[name, kind, ext]``.

    Raises FormatError unless there are exactly three dot-separated tokens.
    """
    tokens = Path(input_file).name.split(".")
    if len(tokens) != 3:
        logger.error("invalid csolution file name: '%s'", input_file)
        raise FormatError(
            f"invalid csolution file name '{Path(input_file).name}': "
            "expected <name>.csolution.<ext>"
        )
    return tokens


def index_file_path(input_file: str, output: str = "") -> Path:
    """Index document path, under *output* when set, else beside the solution."""
    name = solution_name_tokens(input_file)[0]
    base_dir = Path(output) if output else Path(input_file).parent
    return base_dir / f"{name}{INDEX_SUFFIX}"


def formulate_path(descriptor: Path, kind: str, item: ContextItem) -> Path:
    """``<descriptor dir>/<kind>/<project>[/<build>]/<target>``."""
    path = descriptor.parent / kind / item.project_name
    if item.build_type:
        path = path / item.build_type
    return path / item.target_type


def context_dirs(descriptor: Path, item: ContextItem) -> Tuple[Path, Path]:
    """(outdir, intdir) for one context."""
    return formulate_path(descriptor, OUT_DIR, item), formulate_path(descriptor, TMP_DIR, item)
