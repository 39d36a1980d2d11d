"""
Selector — which contexts a build run processes.

Three intents, checked in order:
  1. ``context``       → that single (validated, canonical) context.
  2. no configuration  → the whole catalog, in declaration order.
  3. ``configuration`` → catalog entries whose configuration equals it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Sequence, Tuple

from csolution_builder.core.context import configuration_of, validate_context
from csolution_builder.core.errors import NotFoundError
from csolution_builder.policy.options import BuildOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Selected contexts plus the options to carry forward."""

    contexts: Tuple[str, ...]
    options: BuildOptions


def contexts_for_configuration(catalog: Sequence[str], configuration: str) -> List[str]:
    """Catalog entries whose configuration equals *configuration* exactly."""
    selected = [c for c in catalog if configuration_of(c) == configuration]
    if not selected:
        logger.error("no context found for configuration '%s'", configuration)
        raise NotFoundError(
            f"no context found for configuration '{configuration}'"
        )
    return selected


def select_contexts(catalog: Sequence[str], options: BuildOptions) -> Selection:
    """
    Resolve *options* against *catalog* (declaration order).

    Membership does not depend on order, so the declaration-ordered
    catalog also serves context validation.
    """
    options.check_exclusive()

    if options.context:
        context = validate_context(catalog, options.context)
        return Selection(contexts=(context,), options=replace(options, context=context))

    if not options.configuration:
        return Selection(contexts=tuple(catalog), options=options)

    return Selection(
        contexts=tuple(contexts_for_configuration(catalog, options.configuration)),
        options=options,
    )
