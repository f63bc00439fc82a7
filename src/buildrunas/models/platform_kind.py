"""Script platform model."""

from enum import Enum

from buildrunas.constants import POSIX_SCRIPT_SUFFIX, WINDOWS_SCRIPT_SUFFIX


class PlatformKind(Enum):
    POSIX = "posix"
    WINDOWS = "windows"

    @property
    def script_suffix(self) -> str:
        if self is PlatformKind.WINDOWS:
            return WINDOWS_SCRIPT_SUFFIX
        return POSIX_SCRIPT_SUFFIX

    @property
    def line_separator(self) -> str:
        if self is PlatformKind.WINDOWS:
            return "\r\n"
        return "\n"
