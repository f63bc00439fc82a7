"""Generated wrapper script model."""

from dataclasses import dataclass
from pathlib import Path

from buildrunas.models.platform_kind import PlatformKind


@dataclass(frozen=True)
class GeneratedScript:
    """A wrapper script written to the build temp directory."""

    path: Path
    platform_kind: PlatformKind
    body: str
