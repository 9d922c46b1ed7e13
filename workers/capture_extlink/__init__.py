"""
capture_extlink — re-run a ``go build`` / ``go test`` with toolchain
tracing enabled and harvest the scratch work directory.

Produces, under a per-tag artifact directory:
  - the build transcript (err.<tag>.txt)
  - the requested output binary, if the rebuild links
  - <pkgdir>/*.go|.c|.h|.o copied out of the toolchain WORK dir
  - <pkgdir>/*.od.txt symbol/disassembly dumps of every copied object
"""

__version__ = "0.1.0"
PACKAGE_NAME = "capture_extlink"
TOOL_NAME = "capture-extlink"
SCHEMA_VERSION = "0.1"
