"""Model package for buildrunas."""

from buildrunas.models.command_line import ProgramCommandLine
from buildrunas.models.generated_script import GeneratedScript
from buildrunas.models.platform_kind import PlatformKind
from buildrunas.models.runas_config import RunAsConfig

__all__ = [
    "GeneratedScript",
    "PlatformKind",
    "ProgramCommandLine",
    "RunAsConfig",
]
