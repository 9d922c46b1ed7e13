"""
Harvest — collect build intermediates from the WORK dir and copy them
into the artifact dir.

Layout: ``$WORK/b001/_cgo_gotypes.go`` lands at ``<artdir>/b001/_cgo_gotypes.go``;
the immediate parent directory name is the only part of the source path
that is kept.
"""
from __future__ import annotations

import hashlib
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Sequence, Set

from capture_extlink.errors import HarvestError
from capture_extlink.io.schema import HarvestedFile

logger = logging.getLogger(__name__)


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def collect_artifacts(workdir: str | Path, extensions: Sequence[str]) -> List[Path]:
    """
    Walk *workdir* and return every regular file whose name ends in one
    of *extensions*, deduplicated and sorted.

    Raises
    ------
    HarvestError
        If *workdir* is empty, missing, not a directory, or the walk fails.
    """
    if not str(workdir):
        raise HarvestError("workdir is empty; nothing to walk")
    root = Path(workdir)
    if not root.is_dir():
        raise HarvestError(f"workdir {root} walk: not a directory")

    def _onerror(err: OSError) -> None:
        logger.info("workdir %s walk: at %s: %s", root, err.filename, err)
        raise HarvestError(f"workdir {root} walk: {err}") from err

    found: Set[Path] = set()
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_onerror):
        for name in filenames:
            path = Path(dirpath) / name
            if not path.is_file():
                continue
            if name.endswith(tuple(extensions)):
                found.add(path)

    paths = sorted(found)
    for p in paths:
        logger.debug("workdir path %s", p)
    return paths


def destination_for(path: Path, artifact_dir: Path) -> Path:
    """``<artifact_dir>/<parent dir name>/<file name>`` for *path*."""
    return artifact_dir / path.parent.name / path.name


def copy_artifacts(paths: Iterable[Path], artifact_dir: Path) -> List[HarvestedFile]:
    """
    Copy each of *paths* byte-for-byte into its per-package subdirectory.

    Raises
    ------
    HarvestError
        On any read, write, or mkdir failure.
    """
    harvested: List[HarvestedFile] = []
    for src in paths:
        dest = destination_for(src, artifact_dir)
        logger.debug("copying %s -> %s", src, dest)
        try:
            dest.parent.mkdir(mode=0o777, exist_ok=True)
            shutil.copyfile(src, dest)
        except OSError as e:
            raise HarvestError(f"copying {src}: {dest}: {e}") from e

        harvested.append(HarvestedFile(
            source_path=str(src),
            path_rel=dest.relative_to(artifact_dir).as_posix(),
            package_dir=src.parent.name,
            size_bytes=dest.stat().st_size,
            sha256=_sha256(dest),
        ))
    return harvested
