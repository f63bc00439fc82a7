"""Unit tests for buildrunas.processor."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from buildrunas.errors import PlatformDetectionError, ScriptCreationError
from buildrunas.host import AgentBuildContext
from buildrunas.models import GeneratedScript, PlatformKind, ProgramCommandLine
from buildrunas.processor import RunAsCommandLineProcessor
from buildrunas.script import ScriptGenerator

PARAM = "teamcity.build.runAs.command"

ORIGINAL = ProgramCommandLine(
    executable_path="/usr/bin/python3",
    working_directory="/src",
    arguments=("build.py", "--flag", "with space"),
    environment={"PATH": "/usr/bin", "CI": "1"},
)


def _context(tmp_path, command=None, shared=None):
    params = {} if command is None else {PARAM: command}
    return AgentBuildContext(
        configuration_parameters=params,
        temp_directory=tmp_path,
        shared_parameters=shared or {},
    )


def _posix_processor(**kwargs):
    generator = ScriptGenerator(lambda: PlatformKind.POSIX, MagicMock())
    return RunAsCommandLineProcessor(script_generator=generator, **kwargs)


def _fake_generator(path):
    generator = MagicMock()
    generator.create_script.return_value = GeneratedScript(
        path=Path(path), platform_kind=PlatformKind.POSIX, body=""
    )
    return generator


class TestPassThrough:
    def test_no_configuration_returns_original(self, tmp_path):
        result = _posix_processor().process(_context(tmp_path), ORIGINAL)
        assert result is ORIGINAL
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize("command", ["", "   "])
    def test_blank_configuration_returns_original(self, tmp_path, command):
        result = _posix_processor().process(_context(tmp_path, command), ORIGINAL)
        assert result is ORIGINAL
        assert list(tmp_path.iterdir()) == []

    def test_pass_through_is_repeatable(self, tmp_path):
        processor = _posix_processor()
        first = processor.process(_context(tmp_path), ORIGINAL)
        second = processor.process(_context(tmp_path), ORIGINAL)
        assert first == second == ORIGINAL
        assert list(tmp_path.iterdir()) == []

    def test_generator_not_called_without_configuration(self, tmp_path):
        generator = MagicMock()
        processor = RunAsCommandLineProcessor(script_generator=generator)
        processor.process(_context(tmp_path), ORIGINAL)
        generator.create_script.assert_not_called()


class TestRewrite:
    def test_sudo_end_to_end(self, tmp_path):
        result = _posix_processor().process(
            _context(tmp_path, "sudo -n {start_build_script}"), ORIGINAL
        )

        scripts = list(tmp_path.iterdir())
        assert len(scripts) == 1
        script = scripts[0]
        assert script.suffix == ".sh"
        assert script.read_bytes() == b'cd /src\n/usr/bin/python3 build.py --flag "with space"\n'
        assert result.executable_path == "sudo"
        assert result.arguments == ("-n", str(script.absolute()))
        assert result.working_directory == "/src"
        assert result.environment == {"PATH": "/usr/bin", "CI": "1"}

    def test_original_is_not_modified(self, tmp_path):
        _posix_processor().process(_context(tmp_path, "sudo {start_build_script}"), ORIGINAL)
        assert ORIGINAL.executable_path == "/usr/bin/python3"
        assert ORIGINAL.arguments == ("build.py", "--flag", "with space")

    def test_script_path_with_spaces_stays_one_argument(self, tmp_path):
        processor = RunAsCommandLineProcessor(
            script_generator=_fake_generator("/tmp/agent temp/build1.sh")
        )
        result = processor.process(
            _context(tmp_path, "runas /user:ci {start_build_script}"), ORIGINAL
        )
        assert result.executable_path == "runas"
        assert result.arguments == ("/user:ci", "/tmp/agent temp/build1.sh")

    def test_quoted_launcher_executable(self, tmp_path):
        processor = RunAsCommandLineProcessor(script_generator=_fake_generator("/t/b.sh"))
        result = processor.process(
            _context(tmp_path, '"C:\\Program Files\\elevate.exe" -wait {start_build_script}'),
            ORIGINAL,
        )
        assert result.executable_path == "C:\\Program Files\\elevate.exe"
        assert result.arguments == ("-wait", "/t/b.sh")

    def test_macro_embedded_in_argument(self, tmp_path):
        processor = RunAsCommandLineProcessor(script_generator=_fake_generator("/t/b.sh"))
        result = processor.process(
            _context(tmp_path, "su ci -c {start_build_script} --script={start_build_script}"),
            ORIGINAL,
        )
        assert result.arguments == ("ci", "-c", "/t/b.sh", "--script=/t/b.sh")

    def test_shared_parameters_are_resolved(self, tmp_path):
        processor = RunAsCommandLineProcessor(script_generator=_fake_generator("/t/b.sh"))
        result = processor.process(
            _context(tmp_path, "sudo -u %build.user% {start_build_script}", {"build.user": "ci"}),
            ORIGINAL,
        )
        assert result.arguments == ("-u", "ci", "/t/b.sh")

    def test_missing_macro_drops_script_path(self, tmp_path, caplog):
        result = _posix_processor().process(_context(tmp_path, "sudo -n"), ORIGINAL)

        assert result.executable_path == "sudo"
        assert result.arguments == ("-n",)
        assert len(list(tmp_path.iterdir())) == 1
        assert "does not contain {start_build_script}" in caplog.text

    def test_custom_key_and_macro(self, tmp_path):
        processor = RunAsCommandLineProcessor(
            parameter_key="elevate.command",
            macro="@SCRIPT@",
            script_generator=_fake_generator("/t/b.sh"),
        )
        context = AgentBuildContext(
            configuration_parameters={"elevate.command": "doas @SCRIPT@", PARAM: "sudo {start_build_script}"},
            temp_directory=tmp_path,
        )
        result = processor.process(context, ORIGINAL)
        assert result.executable_path == "doas"
        assert result.arguments == ("/t/b.sh",)

    def test_script_created_in_context_temp_directory(self, tmp_path):
        generator = _fake_generator("/t/b.sh")
        processor = RunAsCommandLineProcessor(script_generator=generator)
        processor.process(_context(tmp_path, "sudo {start_build_script}"), ORIGINAL)
        generator.create_script.assert_called_once_with(ORIGINAL, tmp_path)


class TestErrors:
    def test_platform_detection_failure_propagates(self, tmp_path):
        def classify():
            raise PlatformDetectionError("unknown os")

        processor = RunAsCommandLineProcessor(script_generator=ScriptGenerator(classify, MagicMock()))
        with pytest.raises(PlatformDetectionError):
            processor.process(_context(tmp_path, "sudo {start_build_script}"), ORIGINAL)

    def test_temp_file_failure_propagates(self, tmp_path):
        processor = _posix_processor()
        context = AgentBuildContext(
            configuration_parameters={PARAM: "sudo {start_build_script}"},
            temp_directory=tmp_path / "does-not-exist",
        )
        with pytest.raises(ScriptCreationError, match="Failed to create temp file"):
            processor.process(context, ORIGINAL)


class TestLauncherHelpers:
    def test_launcher_executable(self, tmp_path):
        processor = RunAsCommandLineProcessor()
        assert processor.launcher_executable(_context(tmp_path, "sudo -n x")) == "sudo"
        assert processor.launcher_executable(_context(tmp_path)) is None
        assert processor.launcher_executable(_context(tmp_path, "")) is None

    def test_launcher_arguments_without_configuration(self, tmp_path):
        processor = RunAsCommandLineProcessor()
        assert processor.launcher_arguments(_context(tmp_path), "/t/b.sh") == []
