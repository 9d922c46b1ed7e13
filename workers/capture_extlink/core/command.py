"""
Command — validate the wrapped ``go build`` / ``go test`` invocation and
derive the instrumented rebuild command from it.

The rebuild command:
  - asks for a full command trace and keeps the WORK dir  (-x -work)
  - writes the binary into the artifact dir               (-o <dir>/<tag>.exe)
  - points the linker's temp dir at the artifact dir      (-ldflags=-tmpdir=...)

Everything else the user passed is forwarded untouched, in order.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from capture_extlink.policy.profile import CaptureProfile

_LDFLAGS_SPELLINGS = ("-ldflags", "--ldflags")


def validate_command(cmd: Sequence[str], profile: CaptureProfile) -> Optional[str]:
    """Return a usage message if *cmd* is not ``go build|test ...``, else None."""
    if len(cmd) < 2 or cmd[0] != "go" or cmd[1] not in profile.allowed_subcommands:
        return "please supply 'go build' or 'go test' command"
    return None


def find_ldflags(cmd: Sequence[str]) -> Tuple[int, str]:
    """
    Locate the linker-flags argument in *cmd*.

    Returns ``(index, value)`` where *index* is the position of the token
    that carries the value, or ``(-1, "")`` when no linker flags are given.
    Both ``-ldflags=VALUE`` and ``-ldflags VALUE`` are recognized.  A
    trailing ``-ldflags`` with no value yields ``(len(cmd), "")``: the
    value slot is just past the end.
    """
    for i, arg in enumerate(cmd):
        for spelling in _LDFLAGS_SPELLINGS:
            if arg.startswith(spelling + "="):
                return i, arg[len(spelling) + 1:]
            if arg == spelling:
                if i + 1 < len(cmd):
                    return i + 1, cmd[i + 1]
                return i + 1, ""
    return -1, ""


def build_rebuild_command(
    cmd: Sequence[str],
    artifact_dir: Path,
    output_binary: Path,
    profile: CaptureProfile | None = None,
) -> List[str]:
    """
    Build the instrumented rebuild command for a validated *cmd*.

    An existing linker-flags argument gets the temp-dir instruction
    prepended in place; otherwise a new one is inserted ahead of the
    forwarded arguments.  *cmd* itself is not modified.
    """
    if profile is None:
        profile = CaptureProfile.v0()

    tmpdir = f"{profile.linker_tmpdir_flag}{artifact_dir}"
    rest = list(cmd[2:])

    rcmd = [cmd[0], cmd[1], *profile.rebuild_flags, "-o", str(output_binary)]

    slot, value = find_ldflags(cmd)
    if slot == len(cmd):
        rest.append(tmpdir)
    elif slot != -1:
        # slot indexes into cmd; rest starts at cmd[2]
        token = cmd[slot]
        prefix = token[: len(token) - len(value)]
        rest[slot - 2] = prefix + " ".join(filter(None, (tmpdir, value)))
    else:
        rcmd.append(f"-ldflags={tmpdir}")

    rcmd.extend(rest)
    return rcmd
