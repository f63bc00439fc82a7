"""Exceptions raised while preparing a build step."""


class RunBuildError(Exception):
    """The build step cannot be started."""


class PlatformDetectionError(RunBuildError):
    """The current OS could not be classified as POSIX or Windows."""


class ScriptCreationError(RunBuildError):
    """The wrapper script could not be created or written."""


class ConfigError(Exception):
    """The buildrunas configuration file is unreadable or invalid."""
