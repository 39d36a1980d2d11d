"""
Index loader — read the index document and locate a context's descriptor.
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from csolution_builder import DESCRIPTOR_EXT
from csolution_builder.core.errors import FormatError, NotFoundError
from csolution_builder.io.schema import IndexDocument

logger = logging.getLogger(__name__)


def load_index(index_path: Path) -> IndexDocument:
    """
    Parse ``*.cbuild-idx.yml``.

    Raises NotFoundError when the file is missing and FormatError when
    it is not a valid index document.
    """
    try:
        with open(index_path, "r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except FileNotFoundError as e:
        logger.error("index file not found: %s", index_path)
        raise NotFoundError(f"index file not found: '{index_path}'") from e
    except yaml.YAMLError as e:
        logger.error("invalid YAML in %s: %s", index_path, e)
        raise FormatError(f"invalid YAML in '{index_path}': {e}") from e

    try:
        return IndexDocument.model_validate(payload or {})
    except ValidationError as e:
        logger.error("invalid index document %s: %s", index_path, e)
        raise FormatError(f"invalid index document '{index_path}': {e}") from e


def locate_descriptor(index_path: Path, context: str) -> Path:
    """
    Absolute path of the descriptor generated for *context*.

    The first entry whose path contains *context* as a substring wins,
    so a context name that is a substring of another may resolve to the
    wrong entry if that one is listed first.
    """
    index = load_index(index_path)

    entry_path = None
    for entry in index.build_idx.cbuilds:
        if context in entry.cbuild:
            entry_path = entry.cbuild
            break

    if entry_path is None:
        logger.error("no descriptor for context '%s' in %s", context, index_path)
        raise NotFoundError(
            f"descriptor for context '{context}' not found in '{index_path}'"
        )

    descriptor = index_path.parent / Path(entry_path).parent / f"{context}.{DESCRIPTOR_EXT}"
    return descriptor.absolute()
