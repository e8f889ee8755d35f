"""Tests for CLI validate command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from telemetry_privacy.cli.main import app
from telemetry_privacy.scrubbing import sanitize_dump

runner = CliRunner()


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def clean_dump(dump_file, sample_event, sample_breadcrumb) -> Path:
    """Create a dump that has already been scrubbed."""
    data = {"events": [sample_event()], "breadcrumbs": [sample_breadcrumb()]}
    return dump_file(sanitize_dump(data), name="clean.json")


@pytest.fixture
def leaky_dump(dump_file, sample_event) -> Path:
    """Create a dump with unscrubbed events."""
    return dump_file([sample_event()], name="leaky.json")


@pytest.fixture
def warning_dump(dump_file, sample_breadcrumb) -> Path:
    """Create a dump whose only finding is a warning."""
    crumb = sample_breadcrumb("navigation", {"from": "/a", "to": "/b?id=1"})
    return dump_file({"breadcrumbs": [crumb]}, name="warning.json")


# =============================================================================
# Test Classes
# =============================================================================


class TestValidateFile:
    """Validate a single file."""

    def test_clean_file(self, clean_dump: Path) -> None:
        """Test a clean dump passes."""
        result = runner.invoke(app, ["validate", str(clean_dump)])

        assert result.exit_code == 0
        assert "Clean" in result.stdout
        assert "0 errors, 0 warnings" in result.stdout

    def test_leaky_file(self, leaky_dump: Path) -> None:
        """Test a leaky dump fails with findings."""
        result = runner.invoke(app, ["validate", str(leaky_dump)])

        assert result.exit_code == 1
        assert "[ERROR]" in result.stdout
        assert "user.email" in result.stdout
        assert "test@example.com" not in result.stdout

    def test_warnings_pass_without_strict(self, warning_dump: Path) -> None:
        """Test warnings alone don't fail validation."""
        result = runner.invoke(app, ["validate", str(warning_dump)])

        assert result.exit_code == 0
        assert "[WARN]" in result.stdout

    def test_warnings_fail_with_strict(self, warning_dump: Path) -> None:
        """Test --strict treats warnings as errors."""
        result = runner.invoke(app, ["validate", str(warning_dump), "--strict"])

        assert result.exit_code == 1

    def test_file_not_found(self, tmp_path: Path) -> None:
        """Test error for a missing file."""
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_no_arguments(self) -> None:
        """Test error when neither file nor --dir is given."""
        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 1
        assert "Provide either" in result.output

    def test_invalid_json_counts_as_error(self, tmp_path: Path) -> None:
        """Test unreadable dumps are reported as errors."""
        path = tmp_path / "broken.json"
        path.write_text("{nope")

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestValidateDirectory:
    """Validate a directory of dumps."""

    def test_directory(self, clean_dump: Path, leaky_dump: Path) -> None:
        """Test all dumps in a directory are validated."""
        result = runner.invoke(app, ["validate", "--dir", str(clean_dump.parent)])

        assert result.exit_code == 1
        assert "clean.json: Clean" in result.stdout
        assert "leaky.json" in result.stdout

    def test_recursive(self, tmp_path: Path, sample_event) -> None:
        """Test --recursive finds nested dumps."""
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "deep.json").write_text(json.dumps([sample_event()]))

        flat = runner.invoke(app, ["validate", "--dir", str(tmp_path)])
        deep = runner.invoke(app, ["validate", "--dir", str(tmp_path), "--recursive"])

        assert "No dump files found" in flat.stdout
        assert flat.exit_code == 0
        assert deep.exit_code == 1
        assert "deep.json" in deep.stdout

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Test error for a missing directory."""
        result = runner.invoke(app, ["validate", "--dir", str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "Directory not found" in result.output
