"""
Shared pytest fixtures for capture_extlink tests.

No Go toolchain is needed: ``FakeToolchain`` implements the
ProcessRunner capability and behaves like ``go`` / ``objdump`` would,
writing a transcript that announces a synthetic WORK dir.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from capture_extlink.config import CaptureConfig, Settings
from capture_extlink.io.process import CommandResult

GO_OBJECT = b"go object linux amd64 go1.21.0 X:regabiwrappers\n\n!\x00go121ld"
HOST_OBJECT = b"\x00\x00not-really-an-elf-relocatable\x00"


class FakeToolchain:
    """Stand-in for go / objdump; records every command it is asked to run."""

    def __init__(
        self,
        workdir: Path,
        transcript_lines: Optional[List[str]] = None,
        build_exit: int = 0,
        clean_exit: int = 0,
        dump_exit: int = 0,
        clean_output: str = "",
    ):
        self.workdir = workdir
        self.transcript_lines = transcript_lines
        self.build_exit = build_exit
        self.clean_exit = clean_exit
        self.dump_exit = dump_exit
        self.clean_output = clean_output
        self.calls: List[List[str]] = []

    def run(self, cmd: Sequence[str]) -> CommandResult:
        self.calls.append(list(cmd))
        if list(cmd[1:]) == ["clean", "-cache"]:
            return CommandResult(returncode=self.clean_exit, output=self.clean_output)
        return CommandResult(returncode=0, output="")

    def run_to_file(self, cmd: Sequence[str], outfile: Path) -> int:
        self.calls.append(list(cmd))
        outfile = Path(outfile)
        if cmd[1] in ("build", "test"):
            lines = self.transcript_lines
            if lines is None:
                lines = [
                    f"WORK={self.workdir}",
                    "mkdir -p $WORK/b001/",
                    "cd /src/pkg",
                ]
            outfile.write_text("\n".join(lines) + "\n")
            if self.build_exit == 0:
                binary = Path(cmd[cmd.index("-o") + 1])
                binary.write_bytes(b"\x7fELF-binary")
            return self.build_exit

        outfile.write_text(f"SYMBOL TABLE:\n{cmd[-1]}\n")
        return self.dump_exit

    def commands_for(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]


@pytest.fixture
def scratch_workdir(tmp_path: Path) -> Path:
    """A WORK dir shaped like go's: b001/ with Go sources and objects."""
    wd = tmp_path / "scratch" / "xyz"
    b001 = wd / "b001"
    b001.mkdir(parents=True)
    (b001 / "main.go").write_text("package main\n\nfunc main() {}\n")
    (b001 / "_go_.o").write_bytes(GO_OBJECT)
    return wd


@pytest.fixture
def mixed_workdir(tmp_path: Path) -> Path:
    """A WORK dir with allow-listed and other files across packages."""
    wd = tmp_path / "work"
    b001 = wd / "b001"
    b002 = wd / "b002"
    b001.mkdir(parents=True)
    b002.mkdir(parents=True)

    (b001 / "_cgo_gotypes.go").write_text("package main\n")
    (b001 / "_go_.o").write_bytes(GO_OBJECT)
    (b001 / "importcfg").write_text("packagefile fmt=/x/fmt.a\n")
    (b001 / "_pkg_.a").write_bytes(b"!<arch>\n")
    (b002 / "_x001.o").write_bytes(HOST_OBJECT)
    (b002 / "hello.c").write_text("int hello(void) { return 1; }\n")
    (b002 / "hello.h").write_text("int hello(void);\n")
    (b002 / "notes.txt").write_text("not harvested\n")
    (b002 / "exe").mkdir()
    (b002 / "exe" / "a.out").write_bytes(b"\x7fELF")
    (b002 / "dir.o").mkdir()
    return wd


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    root = tmp_path / "artifacts"
    root.mkdir()
    return Settings(ARTIFACT_ROOT=str(root))


@pytest.fixture
def config(settings: Settings) -> CaptureConfig:
    return CaptureConfig(tag="demo1", verbosity=1, settings=settings)


@pytest.fixture
def go_object() -> bytes:
    return GO_OBJECT


@pytest.fixture
def host_object() -> bytes:
    return HOST_OBJECT


@pytest.fixture
def make_toolchain():
    """Factory for FakeToolchain instances."""
    return FakeToolchain
