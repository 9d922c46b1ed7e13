"""
Objdump — classify harvested object files and dump their symbols.

Two kinds of ``.o`` show up in a Go WORK dir:
  - Go-native objects written by the compiler; these start with a
    ``go object <goos> <goarch> ...`` header and only ``go tool objdump``
    understands them.
  - Host objects from cgo's C compilation (``_x001.o``, ``_cgo_main.o``);
    these are ordinary ELF/Mach-O relocatables for the system ``objdump``.

Each dump is written next to its object as ``<stem>.od.txt``.
"""
from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional

from elftools.common.exceptions import ELFError
from elftools.elf.elffile import ELFFile

from capture_extlink.config import Settings
from capture_extlink.errors import CaptureError, ToolchainError
from capture_extlink.io.process import ProcessRunner
from capture_extlink.io.schema import ObjectDump
from capture_extlink.policy.profile import CaptureProfile

logger = logging.getLogger(__name__)


class ObjectKind(str, Enum):
    GO = "go"
    HOST = "host"


def classify_object(path: Path, profile: CaptureProfile) -> ObjectKind:
    """Go-native if the object header carries the Go marker, host otherwise."""
    try:
        with open(path, "rb") as f:
            head = f.read(profile.object_sniff_bytes)
    except OSError as e:
        raise CaptureError(f"reading object file {path} failed: {e}") from e

    if profile.go_object_marker in head:
        return ObjectKind.GO
    return ObjectKind.HOST


def host_object_machine(path: Path) -> Optional[str]:
    """ELF e_machine of a host object, or None if it is not ELF."""
    try:
        with open(path, "rb") as f:
            return ELFFile(f).header["e_machine"]
    except (ELFError, Exception) as e:
        logger.debug("not an ELF object %s: %s", path, e)
        return None


def dump_command(path: Path, kind: ObjectKind, settings: Settings) -> List[str]:
    if kind == ObjectKind.GO:
        return [settings.GO_BINARY, "tool", "objdump", str(path)]
    return [settings.OBJDUMP_BINARY, "-t", str(path)]


def dump_path_for(path: Path, profile: CaptureProfile) -> Path:
    return path.with_name(path.name[: -len(profile.object_extension)] + profile.dump_suffix)


def annotate_objects(
    artifact_dir: Path,
    runner: ProcessRunner,
    settings: Settings,
    profile: CaptureProfile | None = None,
) -> List[ObjectDump]:
    """
    Dump every object file under *artifact_dir*.

    Raises
    ------
    ToolchainError
        If a dumper cannot be started or exits non-zero.
    """
    if profile is None:
        profile = CaptureProfile.v0()

    def _onerror(err: OSError) -> None:
        raise CaptureError(f"artifact dir {artifact_dir} walk: {err}") from err

    objects: List[Path] = []
    for dirpath, _dirnames, filenames in os.walk(artifact_dir, onerror=_onerror):
        for name in filenames:
            if name.endswith(profile.object_extension):
                objects.append(Path(dirpath) / name)

    dumps: List[ObjectDump] = []
    for obj in sorted(objects):
        kind = classify_object(obj, profile)
        cmd = dump_command(obj, kind, settings)
        out = dump_path_for(obj, profile)

        rc = runner.run_to_file(cmd, out)
        if rc != 0:
            raise ToolchainError(
                f"error executing cmd {' '.join(cmd)}: exit status {rc}"
            )

        dumps.append(ObjectDump(
            object_path_rel=obj.relative_to(artifact_dir).as_posix(),
            dump_path_rel=out.relative_to(artifact_dir).as_posix(),
            kind=kind.value,
            command=cmd,
            elf_machine=host_object_machine(obj) if kind == ObjectKind.HOST else None,
        ))
    return dumps
