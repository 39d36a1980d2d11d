"""
Context — codec for ``<project>[.<buildType>]+<targetType>`` identifiers.

A context names one build variant of one project.  Its *configuration*
is the build/target suffix shared across projects:
``.<buildType>+<targetType>`` or ``+<targetType>``.

Fields are parsed once into a ContextItem; downstream code reads the
fields and never re-scans the string.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from csolution_builder.core.errors import FormatError, NotFoundError

logger = logging.getLogger(__name__)

BUILD_DELIM = "."
TARGET_DELIM = "+"

# project = run up to the first '.' or '+'
# build   = optional '.'-prefixed run up to the first '+'
# target  = everything after the last '+'
_CONTEXT_RE = re.compile(
    r"^(?P<project>[^.+]*)"
    r"(?:\.(?P<build>[^+]*))?"
    r"\+(?:[^+]*\+)*"
    r"(?P<target>[^+]*)$"
)


@dataclass(frozen=True)
class ContextItem:
    """Structured form of a context identifier."""

    project_name: str
    target_type: str
    build_type: str = ""


def parse_context(value: str) -> ContextItem:
    """
    Split *value* into project, build type and target type.

    Raises FormatError when the ``+`` delimiter is missing or the
    project or target type is empty.
    """
    match = _CONTEXT_RE.match(value)
    if match is None or not match.group("target") or not match.group("project"):
        logger.error("invalid context '%s'", value)
        raise FormatError(
            f"invalid context '{value}': expected <project>[.<build-type>]+<target-type>"
        )
    return ContextItem(
        project_name=match.group("project"),
        build_type=match.group("build") or "",
        target_type=match.group("target"),
    )


def format_context(item: ContextItem) -> str:
    """Reassemble a ContextItem into its canonical string."""
    if not item.project_name or not item.target_type:
        raise FormatError(
            f"context requires project and target type, got {item!r}"
        )
    text = item.project_name
    if item.build_type:
        text += BUILD_DELIM + item.build_type
    return text + TARGET_DELIM + item.target_type


def configuration_of(context: str) -> Optional[str]:
    """
    The configuration suffix of *context*.

    Starts at the first ``.`` if there is one, else at the first ``+``;
    None when the context has neither.
    """
    build_idx = context.find(BUILD_DELIM)
    if build_idx != -1:
        return context[build_idx:]
    target_idx = context.find(TARGET_DELIM)
    if target_idx != -1:
        return context[target_idx:]
    return None


def validate_context(catalog: Sequence[str], value: str) -> str:
    """
    Canonicalize *value* and require it to be one of *catalog*.

    Returns the canonical context.  Raises NotFoundError listing every
    valid context (sorted) when it is not part of the catalog.
    """
    context = format_context(parse_context(value))
    if context not in catalog:
        listing = "\n".join(sorted(catalog))
        logger.error("specified context '%s' not found", value)
        raise NotFoundError(
            f"specified context '{value}' not found. "
            f"One of the following contexts must be specified:\n{listing}"
        )
    return context
