# patchview/changes.py
import logging
from typing import Any, Dict, Iterable, Optional

from .models import ChangeFile
from .patch_parser import parse_patch
from .path_filter import PathFilter

logger = logging.getLogger(__name__)


def build_change_files(
    files: Iterable[Dict[str, Any]],
    path_filter: Optional[PathFilter] = None,
    max_files: int = 0,
) -> list[ChangeFile]:
    """
    Build ChangeFile records from the "list pull request files" payload.

    Files rejected by `path_filter` are skipped. `max_files` caps how many
    files are kept (0 means no cap). A file without a `patch` key (binary or
    too large for the API to inline) is kept with no hunks.
    """
    changes: list[ChangeFile] = []

    for f in files:
        filename = f.get("filename", "")

        if path_filter is not None and not path_filter.check(filename):
            logger.info(f"Skipping {filename}: excluded by path filters")
            continue

        if max_files > 0 and len(changes) >= max_files:
            logger.info(f"Reached max_files={max_files}, ignoring remaining files")
            break

        hunks = parse_patch(filename=filename, patch=f.get("patch"))
        change = ChangeFile.model_validate({**f, "hunks": hunks})
        logger.info(f"{change.filename}: {change.status}, {len(hunks)} hunk(s)")
        changes.append(change)

    return changes
