"""Wrapper script generation."""

import contextlib
import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from buildrunas.cmdline import render_command_line
from buildrunas.constants import SCRIPT_PREFIX
from buildrunas.errors import ScriptCreationError
from buildrunas.models import GeneratedScript, PlatformKind, ProgramCommandLine
from buildrunas.platform_info import classify_platform, set_executable_bits

log = logging.getLogger(__name__)

PlatformClassifier = Callable[[], PlatformKind]
MakeExecutable = Callable[[Path], None]


def render_script(command_line: ProgramCommandLine, platform_kind: PlatformKind) -> str:
    """Return a script body that changes directory and runs the command line."""
    sep = platform_kind.line_separator
    invocation = render_command_line(command_line.executable_path, command_line.arguments)
    return f"cd {command_line.working_directory}{sep}{invocation}{sep}"


class ScriptGenerator:
    """Writes a command line into a platform-native script in a temp directory."""

    def __init__(
        self,
        classify: PlatformClassifier = classify_platform,
        make_executable: MakeExecutable = set_executable_bits,
    ) -> None:
        self.classify = classify
        self.make_executable = make_executable

    def create_script(self, command_line: ProgramCommandLine, temp_directory: Path) -> GeneratedScript:
        """Create the wrapper script and return it.

        Raises ScriptCreationError when the temp file cannot be created or
        written. Failing to set the executable bit only logs a warning.
        """
        platform_kind = self.classify()
        body = render_script(command_line, platform_kind)
        path = self._write(body, platform_kind, Path(temp_directory))
        if platform_kind is PlatformKind.POSIX:
            self.make_executable(path)
        log.debug("wrote %s script %s", platform_kind.value, path)
        return GeneratedScript(path=path, platform_kind=platform_kind, body=body)

    def _write(self, body: str, platform_kind: PlatformKind, temp_directory: Path) -> Path:
        try:
            fd, name = tempfile.mkstemp(
                prefix=SCRIPT_PREFIX,
                suffix=platform_kind.script_suffix,
                dir=temp_directory,
            )
        except OSError as e:
            raise ScriptCreationError(f"Failed to create temp file, error: {e}") from e

        path = Path(name).absolute()
        try:
            # newline="" keeps the platform line separators exactly as rendered.
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(body)
        except OSError as e:
            with contextlib.suppress(OSError):
                path.unlink()
            raise ScriptCreationError(f"Failed to write temp file {path}, error: {e}") from e
        return path
