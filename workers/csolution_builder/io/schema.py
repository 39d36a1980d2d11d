"""
Schema — Pydantic models for the documents this package reads and writes.

Read:
  <name>.cbuild-idx.yml — index of generated per-context descriptors,
                          produced by ``csolution convert``.
Written:
  build summary JSON    — selected contexts and per-context outcome.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from csolution_builder import PACKAGE_NAME, SCHEMA_VERSION


# ── Index document ───────────────────────────────────────────────────────────

class CbuildEntry(BaseModel):
    """One generated build description, path relative to the index file."""
    model_config = ConfigDict(extra="ignore")

    cbuild: str
    project: Optional[str] = None
    configuration: Optional[str] = None


class BuildIdx(BaseModel):
    model_config = ConfigDict(extra="ignore")

    generated_by: Optional[str] = Field(default=None, alias="generated-by")
    csolution: Optional[str] = None
    cbuilds: List[CbuildEntry] = Field(default_factory=list)


class IndexDocument(BaseModel):
    """Root of ``*.cbuild-idx.yml``."""
    model_config = ConfigDict(extra="ignore")

    build_idx: BuildIdx = Field(alias="build-idx")


# ── Build summary ────────────────────────────────────────────────────────────

class ContextResult(BaseModel):
    context: str
    descriptor: Optional[str] = None
    outdir: Optional[str] = None
    intdir: Optional[str] = None
    status: str = "PENDING"      # PENDING | SUCCESS | FAILED
    error: Optional[str] = None


class BuildSummary(BaseModel):
    """What one orchestration run selected and how far it got."""

    package_name: str = PACKAGE_NAME
    schema_version: str = SCHEMA_VERSION

    solution: str
    selected_contexts: List[str] = Field(default_factory=list)
    installed_packs: List[str] = Field(default_factory=list)
    converted: bool = False
    results: List[ContextResult] = Field(default_factory=list)

    status: str = "PENDING"      # PENDING | SUCCESS | FAILED
    error: Optional[str] = None

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
