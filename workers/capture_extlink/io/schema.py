"""
Schema — Pydantic models describing one capture run.

The report is returned by ``run_capture`` and summarized by the CLI.
It is not written into the artifact directory, whose contents are
exactly the transcript, the binary, and the harvested package dirs.

Runtime contract fields (present in every report):
  package_name, tool_version, profile_id, schema_version.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from capture_extlink import PACKAGE_NAME, SCHEMA_VERSION, __version__


# ── Harvested files ──────────────────────────────────────────────────────────

class HarvestedFile(BaseModel):
    """One file copied out of the WORK dir."""
    source_path: str
    path_rel: str            # relative to the artifact dir, e.g. "b001/_go_.o"
    package_dir: str         # immediate parent dir name in WORK, e.g. "b001"
    size_bytes: int
    sha256: str


# ── Object dumps ─────────────────────────────────────────────────────────────

class ObjectDump(BaseModel):
    """One symbol/disassembly dump written next to a harvested object."""
    object_path_rel: str
    dump_path_rel: str
    kind: str                # go | host
    command: List[str]
    elf_machine: Optional[str] = None   # host objects only, e.g. "EM_X86_64"


# ── Run report ───────────────────────────────────────────────────────────────

class CaptureReport(BaseModel):
    """Everything one capture run did."""

    package_name: str = PACKAGE_NAME
    tool_version: str = __version__
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    tag: str
    artifact_dir: str
    transcript_path: str
    output_binary: str
    binary_present: bool = False

    original_command: List[str]
    rebuild_command: List[str]
    rebuild_exit_code: int
    build_status: str        # SUCCESS | FAILED

    workdir: str
    harvested: List[HarvestedFile] = Field(default_factory=list)
    dumps: List[ObjectDump] = Field(default_factory=list)

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
