"""Rewrites build step command lines to run through a run-as launcher."""

import logging

from buildrunas.cmdline import replace_macro, split_command_arguments
from buildrunas.constants import RUN_AS_COMMAND_PARAM, START_BUILD_SCRIPT_MACRO
from buildrunas.host import BuildContext
from buildrunas.models import ProgramCommandLine
from buildrunas.script import ScriptGenerator

log = logging.getLogger(__name__)


class RunAsCommandLineProcessor:
    """Replaces a command line with ``<launcher> ... <script>``.

    The launcher command is read from the build configuration parameter
    ``parameter_key``. Its first token becomes the new executable and every
    occurrence of ``macro`` in the rest is replaced by the path of a script
    that reproduces the original command line.
    """

    def __init__(
        self,
        parameter_key: str = RUN_AS_COMMAND_PARAM,
        macro: str = START_BUILD_SCRIPT_MACRO,
        script_generator: ScriptGenerator | None = None,
    ) -> None:
        self.parameter_key = parameter_key
        self.macro = macro
        self.script_generator = script_generator or ScriptGenerator()

    def process(self, context: BuildContext, original: ProgramCommandLine) -> ProgramCommandLine:
        executable = self.launcher_executable(context)
        if executable is None:
            log.debug("%s is not set, running %s directly", self.parameter_key, original.executable_path)
            return original

        script = self.script_generator.create_script(original, context.temp_directory)
        arguments = self.launcher_arguments(context, str(script.path))
        log.debug("running %s via %s %s", original.executable_path, executable, arguments)
        return original.with_invocation(executable, arguments)

    def launcher_command(self, context: BuildContext) -> str | None:
        return context.configuration_parameters.get(self.parameter_key)

    def launcher_executable(self, context: BuildContext) -> str | None:
        """Return the first token of the launcher command, or None if there is none."""
        command = self.launcher_command(context)
        if command is None:
            return None
        parts = split_command_arguments(command)
        return parts[0] if parts else None

    def launcher_arguments(self, context: BuildContext, script_path: str) -> list[str]:
        """Return the launcher arguments with the macro replaced by script_path."""
        command = self.launcher_command(context)
        if command is None:
            return []

        command = context.resolve(command)
        if self.macro not in command:
            log.warning(
                "%s does not contain %s, the generated script %s will not be passed to %r",
                self.parameter_key,
                self.macro,
                script_path,
                command,
            )
        command = replace_macro(command, self.macro, script_path)
        return split_command_arguments(command)[1:]
