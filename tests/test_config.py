"""Tests for configuration models and persistence."""

import json
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from midiwire.exceptions import ConfigFileInvalidError, ConfigValidationError
from midiwire.models import AppConfig, FilterConfig
from midiwire.utils import read_model, read_model_or_default, write_model


class SampleModel(BaseModel):
    """Simple model for testing."""

    name: str = "test"
    value: int = 42


@pytest.mark.unit
class TestFilterConfig:
    """Test filter defaults and immutability."""

    def test_defaults(self):
        """Test clock and active sensing are filtered by default, SysEx is not."""
        filters = FilterConfig()

        assert filters.ignore_active_sensing is True
        assert filters.ignore_realtime_clock is True
        assert filters.ignore_sysex is False

    def test_frozen(self):
        """Test filters cannot be mutated in place."""
        filters = FilterConfig()

        with pytest.raises(ValidationError):
            filters.ignore_sysex = True

    def test_copy_with_update(self):
        """Test changing a flag by copying."""
        filters = FilterConfig().model_copy(update={"ignore_sysex": True})

        assert filters.ignore_sysex is True
        assert filters.ignore_realtime_clock is True


@pytest.mark.unit
class TestAppConfig:
    """Test AppConfig loading and saving."""

    def test_defaults(self):
        """Test default config values."""
        config = AppConfig()

        assert config.filters == FilterConfig()
        assert config.network_enabled is False
        assert config.default_destination is None
        assert config.input_port_filter is None

    def test_save_and_load(self, tmp_path: Path):
        """Test a saved config loads back unchanged."""
        path = tmp_path / "config.json"
        config = AppConfig(
            filters=FilterConfig(ignore_sysex=True),
            output_port_filter="Synth",
            default_destination=1,
        )

        config.save(path)
        loaded = AppConfig.load_or_default(path)

        assert loaded == config

    def test_missing_file_gives_default(self, tmp_path: Path):
        """Test a missing file yields defaults without creating it."""
        path = tmp_path / "missing.json"

        config = AppConfig.load_or_default(path)

        assert config == AppConfig()
        assert not path.exists()

    def test_partial_file(self, tmp_path: Path):
        """Test omitted fields fall back to defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"filters": {"ignore_sysex": True}}))

        config = AppConfig.load_or_default(path)

        assert config.filters.ignore_sysex is True
        assert config.filters.ignore_active_sensing is True

    def test_invalid_json(self, tmp_path: Path):
        """Test a trailing comma is reported as a syntax error."""
        path = tmp_path / "config.json"
        path.write_text('{"network_enabled": true,}')

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            AppConfig.load_or_default(path)

        assert "trailing comma" in exc_info.value.user_message
        assert path.read_text() == '{"network_enabled": true,}'

    def test_empty_file(self, tmp_path: Path):
        """Test an empty file is reported, not silently replaced."""
        path = tmp_path / "config.json"
        path.write_text("")

        with pytest.raises(ConfigFileInvalidError) as exc_info:
            AppConfig.load_or_default(path)

        assert "empty" in exc_info.value.user_message

    def test_invalid_value(self, tmp_path: Path):
        """Test a bad filter value names the field."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"filters": {"ignore_sysex": "maybe"}}))

        with pytest.raises(ConfigValidationError) as exc_info:
            AppConfig.load_or_default(path)

        assert exc_info.value.field == "filters.ignore_sysex"
        assert "true or false" in exc_info.value.recovery_hint


@pytest.mark.unit
class TestPersistenceSafety:
    """Test backup, atomic write and default handling of config storage."""

    def test_save_creates_backup(self, tmp_path: Path):
        """Test that write_model creates a .bak file before overwriting."""
        path = tmp_path / "config.json"

        write_model(SampleModel(name="original", value=1), path, backup=False)
        write_model(SampleModel(name="modified", value=2), path, backup=True)

        backup_data = read_model(path.with_suffix(".json.bak"), SampleModel)
        assert backup_data.name == "original"
        assert read_model(path, SampleModel).name == "modified"

    def test_no_temp_file_left(self, tmp_path: Path):
        """Test the atomic write cleans up its temp file."""
        path = tmp_path / "config.json"

        write_model(SampleModel(), path)

        assert not path.with_suffix(".json.tmp").exists()

    def test_load_missing_raises(self, tmp_path: Path):
        """Test read_model requires the file."""
        with pytest.raises(FileNotFoundError):
            read_model(tmp_path / "nope.json", SampleModel)

    def test_load_or_default_factory(self, tmp_path: Path):
        """Test a custom default factory."""
        model = read_model_or_default(
            tmp_path / "nope.json", SampleModel, lambda: SampleModel(name="fallback")
        )

        assert model.name == "fallback"

    def test_first_save_has_no_backup(self, tmp_path: Path):
        """Test nothing is backed up when no previous file exists."""
        path = tmp_path / "nested" / "config.json"

        write_model(SampleModel(), path)

        assert path.exists()
        assert not path.with_suffix(".json.bak").exists()

    def test_read_non_utf8_is_invalid(self, tmp_path: Path):
        """Test a binary file is reported as an invalid config."""
        path = tmp_path / "config.json"
        path.write_bytes(b"\xff\xfe\x00")

        with pytest.raises(ConfigFileInvalidError):
            read_model(path, SampleModel)

    def test_unwritable_directory_raises_oserror(self, tmp_path: Path):
        """Test a save below a regular file surfaces the OSError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(OSError):
            write_model(SampleModel(), blocker / "config.json")
