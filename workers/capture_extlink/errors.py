"""
Errors — fatal conditions that stop a capture run.

Usage errors never reach this module: argparse reports them and exits 2.
Everything raised here is mapped to exit status 1 by the CLI.
"""


class CaptureError(Exception):
    """Unrecoverable operational failure."""


class ArtifactDirError(CaptureError):
    """The artifact directory could not be removed or recreated."""


class ToolchainError(CaptureError):
    """An external tool could not be started or failed where failure is fatal."""


class WorkDirNotFoundError(CaptureError):
    """The build transcript does not announce a WORK directory."""


class HarvestError(CaptureError):
    """The WORK directory could not be walked or a file could not be copied."""
