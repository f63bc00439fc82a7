"""Command line model passed between the build host and the rewriter."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType


@dataclass(frozen=True)
class ProgramCommandLine:
    """An executable with its working directory, arguments and environment."""

    executable_path: str
    working_directory: str
    arguments: tuple[str, ...] = ()
    environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment)))

    def with_invocation(self, executable_path: str, arguments: Sequence[str]) -> "ProgramCommandLine":
        """Return a copy running a different executable in the same directory and environment."""
        return replace(self, executable_path=executable_path, arguments=tuple(arguments))

    def argv(self) -> list[str]:
        return [self.executable_path, *self.arguments]

    def to_dict(self) -> dict[str, object]:
        return {
            "executable_path": self.executable_path,
            "working_directory": self.working_directory,
            "arguments": list(self.arguments),
            "environment": dict(self.environment),
        }
