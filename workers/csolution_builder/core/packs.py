"""
Packs — install the packs a solution needs but which are missing.
"""
from __future__ import annotations

import logging
from typing import List

from csolution_builder.core.catalog import CompilerTool
from csolution_builder.core.errors import BuildError
from csolution_builder.core.tool_runner import locate_tool

logger = logging.getLogger(__name__)

CPACKGET = "cpackget"


def install_missing_packs(tool: CompilerTool) -> List[str]:
    """
    Query missing packs and install them one by one, in listed order.

    The first failing install aborts the remaining list.
    Returns the identifiers that were installed.
    """
    missing = tool.list_missing_packs()
    installed: List[str] = []

    for pack in missing:
        cpackget = locate_tool(tool.install_config, CPACKGET)
        logger.info("Installing pack: %s", pack)
        try:
            tool.runner.execute(
                str(cpackget),
                False,
                "pack", "add", pack, "--force-reinstall", "--agree-embedded-license",
            )
        except BuildError:
            logger.error("error installing pack: %s", pack)
            raise
        installed.append(pack)

    return installed
