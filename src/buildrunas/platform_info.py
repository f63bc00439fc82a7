"""OS classification and executable-bit strategies."""

import logging
import os
import stat
import subprocess
from collections.abc import Callable
from pathlib import Path

from buildrunas.constants import EXECUTABLE_PERMS
from buildrunas.errors import PlatformDetectionError
from buildrunas.models import PlatformKind

log = logging.getLogger(__name__)

# Shell scripts need the read bit to be run by another user (sudo -u, su).
READ_EXECUTE_ALL = (
    stat.S_IRUSR | stat.S_IXUSR | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
)

_OS_NAMES = {
    "posix": PlatformKind.POSIX,
    "nt": PlatformKind.WINDOWS,
}


def classify_platform(os_name: str | None = None) -> PlatformKind:
    """Return the script platform for an ``os.name`` value (current OS by default)."""
    name = os.name if os_name is None else os_name
    try:
        kind = _OS_NAMES[name]
    except KeyError:
        raise PlatformDetectionError(
            f"Unable to determine script type for operating system {name!r}"
        ) from None
    log.debug("os.name=%s classified as %s", name, kind.value)
    return kind


def chmod_executable(path: Path, perms: str = EXECUTABLE_PERMS) -> None:
    """Run ``chmod`` on the script; failures are logged, never raised."""
    command = ["chmod", perms, str(path)]
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Failed to execute chmod %s %s, error: %s", perms, path, e)
        return
    if result.returncode != 0:
        log.warning(
            "chmod %s %s exited with %d: %s",
            perms,
            path,
            result.returncode,
            (result.stderr or "").strip(),
        )


def set_executable_bits(path: Path) -> None:
    """Make the script readable and executable for owner, group and others."""
    try:
        mode = os.stat(path).st_mode
        os.chmod(path, mode | READ_EXECUTE_ALL)
    except OSError as e:
        log.warning("Failed to make %s executable, error: %s", path, e)


EXECUTABLE_STRATEGIES = {
    "os": set_executable_bits,
    "chmod": chmod_executable,
}


def make_executable_strategy(name: str = "os") -> Callable[[Path], None]:
    """Return the function used to mark POSIX scripts executable."""
    try:
        return EXECUTABLE_STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown executable strategy {name!r}, expected one of: {', '.join(EXECUTABLE_STRATEGIES)}"
        ) from None
