"""Tests for CLI main module."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger level changed by --verbose."""
    logger = logging.getLogger("telemetry_privacy")
    level = logger.level
    yield logger
    logger.setLevel(level)


class TestCliImport:
    """Tests for CLI import availability."""

    def test_can_import_cli_with_typer(self) -> None:
        """Test CLI can be imported when typer is available."""
        pytest.importorskip("typer")
        from telemetry_privacy.cli.main import app

        assert app is not None

    def test_version_option(self) -> None:
        """Test version option works."""
        pytest.importorskip("typer")
        from typer.testing import CliRunner

        from telemetry_privacy import __version__
        from telemetry_privacy.cli.main import app

        runner = CliRunner()
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"telemetry-privacy {__version__}" in result.stdout


class TestVerboseOption:
    """Tests for the --verbose logging switch."""

    @pytest.mark.parametrize(
        ("args", "level"),
        [
            (["--verbose"], logging.DEBUG),
            (["-v"], logging.DEBUG),
            ([], logging.WARNING),
        ],
        ids=["long", "short", "default"],
    )
    def test_package_log_level(self, dump_file, package_logger: logging.Logger, args: list[str], level: int) -> None:
        """Test the package logger level follows the flag."""
        pytest.importorskip("typer")
        from typer.testing import CliRunner

        from telemetry_privacy.cli.main import app

        path = dump_file({"message": "ok"})

        result = CliRunner().invoke(app, [*args, "scrub", str(path)])

        assert result.exit_code == 0
        assert package_logger.level == level

    def test_verbose_logs_output_path(
        self, dump_file, package_logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test verbose runs log where the sanitized dump was written, without payload content."""
        pytest.importorskip("typer")
        from typer.testing import CliRunner

        from telemetry_privacy.cli.main import app

        path = dump_file({"user": {"id": 1, "email": "x@y.com"}})

        result = CliRunner().invoke(app, ["--verbose", "scrub", str(path)])

        assert result.exit_code == 0
        assert "Sanitized dump written to" in caplog.text
        assert "x@y.com" not in caplog.text

    def test_quiet_by_default(
        self, dump_file, package_logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test progress lines are not logged without --verbose."""
        pytest.importorskip("typer")
        from typer.testing import CliRunner

        from telemetry_privacy.cli.main import app

        path = dump_file({"message": "ok"})

        result = CliRunner().invoke(app, ["scrub", str(path)])

        assert result.exit_code == 0
        assert "Sanitized dump written to" not in caplog.text
