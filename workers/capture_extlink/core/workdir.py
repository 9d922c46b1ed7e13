"""
Workdir — pick the toolchain WORK directory out of a build transcript.

``go build -x -work`` prints ``WORK=/tmp/go-build123456`` before running
any action.  Plain line-prefix matching; when the marker occurs more
than once the last occurrence wins.
"""
from capture_extlink.errors import WorkDirNotFoundError


def extract_workdir(transcript: str, marker: str = "WORK=") -> str:
    """
    Return the path announced by the last *marker* line of *transcript*.

    Raises
    ------
    WorkDirNotFoundError
        If no line starts with *marker* (or the announced path is empty).
    """
    workdir = ""
    for line in transcript.splitlines():
        if line.startswith(marker):
            workdir = line[len(marker):]

    if not workdir:
        raise WorkDirNotFoundError(
            f"no '{marker}' line in build transcript; "
            "did the build start at all?"
        )
    return workdir
