"""End-to-end tests for the logging options of the top-level `tenantcat` command.

The `log-demo` command (registered by the ``registered_log_demo`` fixture)
emits one message per level on a project logger and a few on a third-party
logger; these tests check how the verbosity flags, logger-level overrides,
debug formatting and the flight recorder shape that output.
"""

import re
from pathlib import Path

import pytest

from tenantcat.entrypoints.cli.main import tenantcat

# pylint: disable=unused-argument


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that regex `pattern` is found in `output`."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that regex `pattern` is NOT found in `output`."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


@pytest.mark.parametrize(
    "flags, shown, hidden",
    [
        ([], "WARNING", "INFO"),
        (["-v"], "INFO", "DEBUG"),
        (["-vv"], "DEBUG", None),
        (["-q"], "ERROR", "WARNING"),
        (["-qq"], "CRITICAL", "ERROR"),
    ],
    ids=["default", "v", "vv", "q", "qq"],
)
def test_verbosity_flags(registered_log_demo, runner, fs, flags, shown, hidden):
    """Each -v lowers and each -q raises the console threshold by one level."""
    result = runner.invoke(tenantcat, flags + ["--no-flight-recorder", "log-demo"])
    assert result.exit_code == 0, result.output
    assert_in_output(shown, result.output)
    if hidden:
        assert_not_in_output(hidden, result.output)


@pytest.mark.parametrize(
    "env, cli_args",
    [
        ({}, ["-vv", "-L", "some.thirdparty=INFO"]),
        ({"TENANTCAT_LOGGER_LEVELS": "some.thirdparty=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_silences_debug(registered_log_demo, runner, fs, env, cli_args):
    """Logger-level overrides silence third-party DEBUG but keep its INFO+."""
    result = runner.invoke(tenantcat, cli_args + ["log-demo"], env=env)
    assert result.exit_code == 0, result.output
    assert_not_in_output("debug-level third-party", result.output)
    assert_in_output("info-level third-party", result.output)


@pytest.mark.parametrize("bad", ["some.thirdparty", "some.thirdparty=LOUD"])
def test_malformed_logger_level_is_a_usage_error(registered_log_demo, runner, fs, bad):
    result = runner.invoke(tenantcat, ["-L", bad, "log-demo"])
    assert result.exit_code == 2
    assert "--logger-level" in result.output


def test_debug_mode_shows_paths(registered_log_demo, runner, fs):
    """With --debug the console format carries the emitting file and line."""
    result = runner.invoke(tenantcat, ["--debug", "--no-flight-recorder", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)

    result = runner.invoke(tenantcat, ["--no-flight-recorder", "log-demo"])
    assert result.exit_code == 0
    assert_not_in_output(r"conftest\.py:\d+\b", result.output)


def test_flight_recorder_flush_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records reach the log file once a WARNING is logged."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        tenantcat,
        ["--log-path", log_path, "-L", "some.thirdparty=INFO", "log-demo"],
    )
    assert result.exit_code == 0
    content = Path(log_path).read_text(encoding="utf-8")

    assert_in_output("This is a debug-level test message.", content)
    assert_in_output("This is a critical-level test message.", content)
    assert_in_output("info-level third-party", content)
    assert_not_in_output("debug-level third-party", content)
    # logged after the last flush, so still only in the buffer
    assert_not_in_output("This is a final debug-level test message.", content)


def test_flight_recorder_in_nested_directory(registered_log_demo, runner, fs):
    log_path = Path("logs", "nested", "tenantcat.log")
    result = runner.invoke(tenantcat, ["--log-path", str(log_path), "log-demo"])
    assert result.exit_code == 0
    assert log_path.is_file()


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--force-flush"]), ({"TENANTCAT_FORCE_FLUSH_FLIGHT_RECORDER": "true"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(registered_log_demo, runner, fs, env, cli_args):
    """With force-flush the buffer is written on exit, trailing DEBUG included."""
    log_path = "flight_recorder.log"
    result = runner.invoke(
        tenantcat, ["--log-path", log_path] + cli_args + ["log-demo"], env=env
    )
    assert result.exit_code == 0
    content = Path(log_path).read_text(encoding="utf-8")
    assert_in_output("This is a final debug-level test message.", content)


@pytest.mark.parametrize(
    "env, cli_args",
    [({}, ["--no-flight-recorder"]), ({"TENANTCAT_FLIGHT_RECORDER": "0"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_can_be_disabled(
    registered_log_demo, runner, fs, env, cli_args
):
    log_path = "flight_recorder.log"
    result = runner.invoke(
        tenantcat, ["--log-path", log_path] + cli_args + ["log-demo"], env=env
    )
    assert result.exit_code == 0
    assert not Path(log_path).exists()


def test_flight_recorder_truncates_log(registered_log_demo, runner, fs):
    """Each run starts a fresh log file instead of appending."""
    log_path = Path("flight_recorder.log")

    sizes = []
    for _ in range(2):
        result = runner.invoke(tenantcat, ["--log-path", str(log_path), "log-demo"])
        assert result.exit_code == 0
        sizes.append(len(log_path.read_text(encoding="utf-8").splitlines()))

    assert sizes[0] == sizes[1]


def test_startup_logging(registered_log_demo, runner, fs):
    """The flight recorder keeps the startup diagnostics."""
    log_path = "startup.log"
    result = runner.invoke(
        tenantcat,
        [
            "--log-path",
            log_path,
            "--force-flush",
            "--redactor-mode",
            "strict",
            "log-demo",
        ],
        env={"TENANTCAT_LOGGER_LEVELS": "some.thirdparty=INFO"},
    )
    assert result.exit_code == 0
    content = Path(log_path).read_text(encoding="utf-8")

    assert_in_output(
        r"TENANTCAT \d+\.\d+\.\d+: console=WARNING, flight-recorder=ON", content
    )
    assert_in_output(r"Python: \d+\.\d+\.\d+", content)
    assert_in_output(r"PID: \d+", content)
    assert_in_output(r"Alembic: \d+\.\d+\.\d+", content)
    assert_in_output(r"SQLAlchemy: \d+\.\d+\.\d+", content)
    assert_in_output(r"Handlers: \['RichHandler', 'MemoryHandler'\]", content)
    assert_in_output(r"Redactor mode: strict", content)
    assert_in_output(
        r"Flight recorder: path=startup\.log, capacity=2000, flush_on_close=True",
        content,
    )
    assert_in_output(
        r"Per-logger overrides: {'sqlalchemy': 'WARNING', 'alembic': 'WARNING', "
        r"'some.thirdparty': 'INFO'}",
        content,
    )
