"""
Run configuration
"""
from dataclasses import dataclass, field
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Environment-level settings (CAPTURE_EXTLINK_* variables)"""

    # Artifact layout
    ARTIFACT_ROOT: str = "/tmp"
    ARTIFACT_PREFIX: str = "xxx."

    # External tools
    GO_BINARY: str = "go"
    OBJDUMP_BINARY: str = "objdump"

    class Config:
        env_prefix = "CAPTURE_EXTLINK_"
        env_file = ".env"
        case_sensitive = True


@dataclass(frozen=True)
class CaptureConfig:
    """Per-run configuration, built once from the command line."""

    tag: str
    verbosity: int = 0
    settings: Settings = field(default_factory=Settings)

    @property
    def artifact_dir(self) -> Path:
        """Deterministic output directory for this tag."""
        return Path(self.settings.ARTIFACT_ROOT) / f"{self.settings.ARTIFACT_PREFIX}{self.tag}"

    @property
    def transcript_path(self) -> Path:
        return self.artifact_dir / f"err.{self.tag}.txt"

    @property
    def output_binary(self) -> Path:
        return self.artifact_dir / f"{self.tag}.exe"
