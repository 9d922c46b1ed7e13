"""
Process — the subprocess capability used by every pipeline step.

Two operations only:
  - run(cmd)                -> CommandResult (combined stdout+stderr text)
  - run_to_file(cmd, path)  -> exit status (stdout+stderr written to *path*)

Tests substitute a fake implementation so no Go toolchain is required.
No timeouts: a hung child hangs the caller.
"""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from capture_extlink.errors import ToolchainError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a captured command."""

    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner(Protocol):
    def run(self, cmd: Sequence[str]) -> CommandResult: ...

    def run_to_file(self, cmd: Sequence[str], outfile: Path) -> int: ...


class SubprocessRunner:
    """ProcessRunner backed by ``subprocess.run``."""

    def run(self, cmd: Sequence[str]) -> CommandResult:
        logger.debug("docmd: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                list(cmd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise ToolchainError(f"error executing cmd {' '.join(cmd)}: {e}") from e
        return CommandResult(returncode=result.returncode, output=result.stdout)

    def run_to_file(self, cmd: Sequence[str], outfile: Path) -> int:
        logger.debug("docmdout: %s > %s", " ".join(cmd), outfile)
        try:
            with open(outfile, "wb") as f:
                result = subprocess.run(list(cmd), stdout=f, stderr=f)
        except OSError as e:
            raise ToolchainError(f"error executing cmd {' '.join(cmd)}: {e}") from e
        return result.returncode
