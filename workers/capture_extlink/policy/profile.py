"""
Profile — the external-contract descriptor for the wrapped Go toolchain.

Everything this tool assumes about ``go`` output formats lives here:
the transcript marker that announces the WORK directory, the header
that identifies a Go-native object file, and the flags used to keep
intermediates on disk.  A toolchain format change is a profile change,
not a code change.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CaptureProfile:
    """Immutable capture configuration."""

    # ── Transcript scraping ──────────────────────────────────────────
    workdir_marker: str = "WORK="

    # ── Object classification ────────────────────────────────────────
    go_object_marker: bytes = b"go object "
    object_sniff_bytes: int = 512

    # ── Harvest selection ────────────────────────────────────────────
    harvest_extensions: Tuple[str, ...] = (".go", ".c", ".h", ".o")
    object_extension: str = ".o"
    dump_suffix: str = ".od.txt"

    # ── Rebuild command ──────────────────────────────────────────────
    allowed_subcommands: Tuple[str, ...] = ("build", "test")
    rebuild_flags: Tuple[str, ...] = ("-x", "-work")
    linker_tmpdir_flag: str = "-tmpdir="

    # ── Identity ─────────────────────────────────────────────────────
    profile_id: str = "go-extlink-v0"

    @classmethod
    def v0(cls) -> CaptureProfile:
        """Return the canonical v0 profile (all defaults)."""
        return cls()
