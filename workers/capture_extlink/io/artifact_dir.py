"""
Artifact directory — remove and recreate the per-tag output directory.

The directory is owned by the current run: whatever a previous run with
the same tag left behind is discarded before anything is written.
"""
import logging
import shutil
from pathlib import Path

from capture_extlink.errors import ArtifactDirError

logger = logging.getLogger(__name__)


def recreate_artifact_dir(path: Path) -> Path:
    """
    Remove *path* (if present) and create it empty.

    Raises
    ------
    ArtifactDirError
        If removal or creation fails.
    """
    logger.debug("recreating artifact dir %s", path)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
    except OSError as e:
        raise ArtifactDirError(f"can't remove {path}: {e}") from e

    try:
        path.mkdir(mode=0o777)
    except OSError as e:
        raise ArtifactDirError(f"can't create {path}: {e}") from e

    return path
