"""
Configurations — unique build/target suffixes shared across projects.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List

from csolution_builder.core.catalog import CompilerTool
from csolution_builder.core.context import configuration_of
from csolution_builder.core.errors import NotFoundError

logger = logging.getLogger(__name__)


def extract_configurations(contexts: Iterable[str], filter: str = "") -> List[str]:
    """
    Configurations of *contexts* in first-occurrence order.

    Duplicates collapse to their first occurrence.  With *filter* only
    configurations containing it as a substring are kept, and an empty
    result raises NotFoundError.
    """
    configurations: List[str] = []
    for context in contexts:
        config = configuration_of(context)
        if config is None:
            continue
        if filter and filter not in config:
            continue
        if config not in configurations:
            configurations.append(config)

    if not configurations:
        if filter:
            logger.error("no configuration was found with filter '%s'", filter)
            raise NotFoundError(f"no configuration was found with filter '{filter}'")
        logger.info("no configuration found")
    return configurations


def list_configurations(tool: CompilerTool) -> List[str]:
    """
    Fetch the catalog and extract its configurations.

    The filter is applied here, not forwarded to the tool.
    """
    filter = tool.options.filter
    contexts = tool.list_contexts(
        quiet=True,
        declaration_order=False,
        options=replace(tool.options, filter=""),
    )
    return extract_configurations(contexts, filter)
