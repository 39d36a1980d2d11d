"""
Writer — serialize the build summary to JSON.
"""
import json
from pathlib import Path

from csolution_builder.io.schema import BuildSummary


def write_summary(summary: BuildSummary, path: Path) -> Path:
    """
    Write *summary* to *path*, creating parent directories.

    Returns *path*.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(
            summary.model_dump(mode="json"),
            indent=2,
            sort_keys=True,
        )
        + "\n"
    )
    return path
