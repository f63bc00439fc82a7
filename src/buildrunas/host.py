"""Build host collaborators consumed by the command line rewriter."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

_REFERENCE_RE = re.compile(r"%%|%([A-Za-z0-9_.\-]+)%")


class BuildContext(Protocol):
    """What the rewriter needs from the running build."""

    @property
    def configuration_parameters(self) -> Mapping[str, str]: ...

    @property
    def temp_directory(self) -> Path: ...

    def resolve(self, text: str) -> str: ...


class SharedParametersResolver:
    """Expands ``%name%`` references from a parameter map.

    Unknown references are left untouched and ``%%`` produces a single ``%``.
    """

    def __init__(self, parameters: Mapping[str, str]) -> None:
        self.parameters = parameters

    def resolve(self, text: str) -> str:
        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is None:
                return "%"
            return self.parameters.get(name, match.group(0))

        return _REFERENCE_RE.sub(_substitute, text)


@dataclass
class AgentBuildContext:
    """A BuildContext backed by an in-memory parameter map."""

    configuration_parameters: Mapping[str, str]
    temp_directory: Path
    shared_parameters: Mapping[str, str] = field(default_factory=dict)

    def resolve(self, text: str) -> str:
        return SharedParametersResolver(self.shared_parameters).resolve(text)
