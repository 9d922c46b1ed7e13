"""
Capture runner — top-level orchestration: go command → artifact dir.

Steps, strictly in order:
  1. recreate the artifact dir for the tag
  2. ``go clean -cache`` so the rebuild actually compiles and links
  3. run the instrumented rebuild, transcript to err.<tag>.txt
     (a failing build is tolerated; its intermediates are still useful)
  4. scrape the WORK dir out of the transcript
  5. copy .go/.c/.h/.o files from WORK into per-package subdirs
  6. dump every copied object to <stem>.od.txt

``run_capture`` can be called directly; ``main`` is the CLI.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, Tuple

from capture_extlink import TOOL_NAME
from capture_extlink.config import CaptureConfig, Settings
from capture_extlink.core.command import build_rebuild_command, validate_command
from capture_extlink.core.harvest import collect_artifacts, copy_artifacts
from capture_extlink.core.objdump import annotate_objects
from capture_extlink.core.workdir import extract_workdir
from capture_extlink.errors import CaptureError, ToolchainError
from capture_extlink.io.artifact_dir import recreate_artifact_dir
from capture_extlink.io.process import ProcessRunner, SubprocessRunner
from capture_extlink.io.schema import CaptureReport
from capture_extlink.policy.profile import CaptureProfile

logger = logging.getLogger(__name__)


# ── Public API ───────────────────────────────────────────────────────────────

def run_capture(
    config: CaptureConfig,
    command: Sequence[str],
    runner: ProcessRunner | None = None,
    profile: CaptureProfile | None = None,
) -> CaptureReport:
    """
    Rebuild *command* with tracing on and harvest its WORK dir.

    Parameters
    ----------
    config : CaptureConfig
        Tag, verbosity and environment settings for this run.
    command : sequence of str
        A validated ``go build ...`` or ``go test ...`` command.
    runner : ProcessRunner, optional
        Subprocess capability.  Defaults to SubprocessRunner().
    profile : CaptureProfile, optional
        Toolchain contract.  Defaults to CaptureProfile.v0().

    Raises
    ------
    CaptureError
        On any fatal step; the artifact dir is left as it is.
    """
    if runner is None:
        runner = SubprocessRunner()
    if profile is None:
        profile = CaptureProfile.v0()

    settings = config.settings
    artdir = config.artifact_dir

    # ── Step 1: fresh artifact dir ───────────────────────────────────
    recreate_artifact_dir(artdir)

    # ── Step 2: cache clean ──────────────────────────────────────────
    clean_cmd = [settings.GO_BINARY, "clean", "-cache"]
    result = runner.run(clean_cmd)
    if result.output:
        logger.debug("go clean output: %s", result.output.strip())
    if not result.ok:
        raise ToolchainError(
            f"error executing cmd {' '.join(clean_cmd)}: "
            f"exit status {result.returncode}"
        )

    # ── Step 3: instrumented rebuild ─────────────────────────────────
    rcmd = build_rebuild_command(command, artdir, config.output_binary, profile)
    rcmd[0] = settings.GO_BINARY
    logger.debug("cmd is: %s", " ".join(rcmd))

    transcript = config.transcript_path
    exit_code = runner.run_to_file(rcmd, transcript)
    if exit_code != 0:
        logger.warning(
            "build/test exited with status %d; harvesting anyway", exit_code
        )
    logger.debug("build/test complete, output in %s", transcript)

    # ── Step 4: WORK dir ─────────────────────────────────────────────
    try:
        text = transcript.read_text(errors="replace")
    except OSError as e:
        raise CaptureError(f"opening {transcript}: {e}") from e
    workdir = extract_workdir(text, profile.workdir_marker)
    logger.debug("workdir is: %s", workdir)

    # ── Step 5: harvest ──────────────────────────────────────────────
    paths = collect_artifacts(workdir, profile.harvest_extensions)
    harvested = copy_artifacts(paths, artdir)

    # ── Step 6: object dumps ─────────────────────────────────────────
    dumps = annotate_objects(artdir, runner, settings, profile)

    return CaptureReport(
        profile_id=profile.profile_id,
        tag=config.tag,
        artifact_dir=str(artdir),
        transcript_path=str(transcript),
        output_binary=str(config.output_binary),
        binary_present=config.output_binary.is_file(),
        original_command=list(command),
        rebuild_command=rcmd,
        rebuild_exit_code=exit_code,
        build_status="SUCCESS" if exit_code == 0 else "FAILED",
        workdir=workdir,
        harvested=harvested,
        dumps=dumps,
    )


# ── CLI ──────────────────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        usage=f"{TOOL_NAME} [flags] -- <go build/go test>",
        description="Rebuild a Go program with the external-link step "
                    "instrumented and capture its intermediates",
    )
    parser.add_argument(
        "-tag", "--tag",
        default="",
        help="Tag to use for artifact dir",
    )
    parser.add_argument(
        "-v", "--verbose",
        type=int,
        default=0,
        metavar="LEVEL",
        help="Verbose trace output level",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="go build ... or go test ...",
    )
    return parser


_VALUE_FLAGS = ("-tag", "--tag", "-v", "--verbose")


def _split_separator(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split *argv* into this tool's flags and the wrapped go command.

    The go command starts after a ``--`` that ends the flags, or at the
    first positional token.  Once it has started, every token (``--``
    included) belongs to it.
    """
    argv = list(argv)
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            return argv[:i], argv[i + 1:]
        if not arg.startswith("-"):
            return argv[:i], argv[i:]
        if arg in _VALUE_FLAGS:
            i += 1
        i += 1
    return argv, []


def main(argv: Optional[Sequence[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    flag_args, trailing = _split_separator(argv)
    args = parser.parse_args(flag_args)
    command = list(args.command) + trailing

    if not args.tag:
        parser.error("please supply tag name with -tag option")
    if os.sep in args.tag or (os.altsep and os.altsep in args.tag) or args.tag in (".", ".."):
        parser.error(f"tag {args.tag!r} must be a plain name, not a path")
    profile = CaptureProfile.v0()
    problem = validate_command(command, profile)
    if problem:
        parser.error(problem)

    config = CaptureConfig(tag=args.tag, verbosity=args.verbose, settings=Settings())

    logging.basicConfig(
        level=logging.DEBUG if config.verbosity >= 1 else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logger.debug("build/test command is: %s", " ".join(command))

    try:
        report = run_capture(config, command, profile=profile)
    except CaptureError as e:
        print(f"{TOOL_NAME}: {e}", file=sys.stderr)
        return 1

    # Print summary
    print(f"Artifact dir: {report.artifact_dir}")
    print(f"Build: {report.build_status} (exit={report.rebuild_exit_code})")
    print(f"Workdir: {report.workdir}")
    print(f"Harvested: {len(report.harvested)} files, "
          f"{len(report.dumps)} object dumps")
    return 0


if __name__ == "__main__":
    sys.exit(main())
