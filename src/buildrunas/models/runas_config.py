"""Configuration model for buildrunas."""

from typing import Literal

from pydantic import BaseModel, Field

from buildrunas.constants import RUN_AS_COMMAND_PARAM, START_BUILD_SCRIPT_MACRO


class RunAsConfig(BaseModel):
    """Runtime configuration for buildrunas."""

    parameter_key: str = RUN_AS_COMMAND_PARAM
    macro: str = START_BUILD_SCRIPT_MACRO
    command: str | None = None
    temp_dir: str | None = None
    executable_strategy: Literal["os", "chmod"] = "os"
    parameters: dict[str, str] = Field(default_factory=dict)

    def configuration_parameters(self) -> dict[str, str]:
        """Return the parameter map with the launcher command stored under its key."""
        params = dict(self.parameters)
        if self.command is not None:
            params[self.parameter_key] = self.command
        return params
