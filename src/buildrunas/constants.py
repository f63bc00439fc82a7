"""Shared constants for buildrunas."""

RUN_AS_COMMAND_PARAM = "teamcity.build.runAs.command"
START_BUILD_SCRIPT_MACRO = "{start_build_script}"

SCRIPT_PREFIX = "build"
POSIX_SCRIPT_SUFFIX = ".sh"
WINDOWS_SCRIPT_SUFFIX = ".cmd"
EXECUTABLE_PERMS = "a+rx"
