"""Rewrite a command line through the configured run-as launcher."""

import argparse
import json
import logging
import os
import shlex
import sys
import tempfile
from pathlib import Path

from buildrunas import __version__
from buildrunas.config import CONFIG_FILE, load_config
from buildrunas.errors import ConfigError, RunBuildError
from buildrunas.host import AgentBuildContext
from buildrunas.models import ProgramCommandLine, RunAsConfig
from buildrunas.platform_info import make_executable_strategy
from buildrunas.processor import RunAsCommandLineProcessor
from buildrunas.script import ScriptGenerator

log = logging.getLogger("buildrunas")


def _parse_param(value: str) -> tuple[str, str]:
    key, sep, param_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, param_value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="buildrunas",
        description="Wrap a command in a script and run it through a run-as launcher",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"Config file (default: {CONFIG_FILE})",
    )
    parser.add_argument("--command", help="Launcher command template, overrides config")
    parser.add_argument("--temp-dir", help="Directory for generated scripts")
    parser.add_argument(
        "--chmod",
        action="store_true",
        help="Mark scripts executable by running chmod instead of os.chmod",
    )
    parser.add_argument("--cwd", default=".", help="Working directory of the wrapped command")
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        type=_parse_param,
        default=[],
        metavar="KEY=VALUE",
        help="Shared parameter available as %%KEY%% in the launcher command",
    )
    parser.add_argument("--json", action="store_true", help="Print the rewritten command as JSON")
    parser.add_argument("executable", help="Executable of the original command")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Arguments of the original command")
    return parser


def _build_context(config: RunAsConfig, params: list[tuple[str, str]]) -> AgentBuildContext:
    temp_directory = Path(config.temp_dir) if config.temp_dir else Path(tempfile.gettempdir())
    shared = dict(config.parameters)
    shared.update(params)
    return AgentBuildContext(
        configuration_parameters=config.configuration_parameters(),
        temp_directory=temp_directory,
        shared_parameters=shared,
    )


def _format(command_line: ProgramCommandLine, as_json: bool) -> str:
    if as_json:
        return json.dumps(command_line.to_dict(), indent=2)
    return shlex.join(command_line.argv())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.command is not None:
        config.command = args.command
    if args.temp_dir is not None:
        config.temp_dir = args.temp_dir
    if args.chmod:
        config.executable_strategy = "chmod"

    arguments = args.arguments
    if arguments and arguments[0] == "--":
        arguments = arguments[1:]
    original = ProgramCommandLine(
        executable_path=args.executable,
        working_directory=str(Path(args.cwd).absolute()),
        arguments=tuple(arguments),
        environment=dict(os.environ),
    )
    log.debug("original command line: %s", original.argv())

    generator = ScriptGenerator(make_executable=make_executable_strategy(config.executable_strategy))
    processor = RunAsCommandLineProcessor(
        parameter_key=config.parameter_key,
        macro=config.macro,
        script_generator=generator,
    )
    try:
        result = processor.process(_build_context(config, args.param), original)
    except RunBuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(_format(result, args.json))
    return 0


def entrypoint() -> None:
    raise SystemExit(main())
