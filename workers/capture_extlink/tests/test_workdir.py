"""
test_workdir — WORK dir extraction from build transcripts.
"""
import pytest

from capture_extlink.core.workdir import extract_workdir
from capture_extlink.errors import CaptureError, WorkDirNotFoundError


class TestExtractWorkdir:

    def test_single_marker(self):
        text = "WORK=/tmp/go-build123\nmkdir -p $WORK/b001/\n"
        assert extract_workdir(text) == "/tmp/go-build123"

    def test_last_marker_wins(self):
        text = "\n".join([
            "WORK=/tmp/first",
            "cd /src",
            "WORK=/tmp/second",
            "echo done",
            "WORK=/tmp/third",
        ])
        assert extract_workdir(text) == "/tmp/third"

    def test_marker_must_start_line(self):
        text = "cat >$WORK/b001/importcfg << 'EOF' # WORK=/nope\nWORK=/yes\n"
        assert extract_workdir(text) == "/yes"

    def test_equals_in_path_kept(self):
        assert extract_workdir("WORK=/tmp/a=b/c\n") == "/tmp/a=b/c"

    def test_crlf_transcript(self):
        assert extract_workdir("WORK=/tmp/win\r\nok\r\n") == "/tmp/win"

    def test_path_taken_verbatim(self):
        assert extract_workdir("WORK=/tmp/with space \n") == "/tmp/with space "

    def test_missing_marker_raises(self):
        with pytest.raises(WorkDirNotFoundError):
            extract_workdir("go: cannot find main module\n")

    def test_empty_transcript_raises(self):
        with pytest.raises(WorkDirNotFoundError):
            extract_workdir("")

    def test_error_is_fatal_kind(self):
        assert issubclass(WorkDirNotFoundError, CaptureError)

    def test_custom_marker(self):
        assert extract_workdir("SCRATCH:/x\n", marker="SCRATCH:") == "/x"
