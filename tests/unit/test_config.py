"""Unit tests for SpecFlow settings."""

from pathlib import Path

import pytest

from specflow.config import SpecFlowSettings


class TestSpecFlowSettings:
    """Test cases for SpecFlowSettings.from_env."""

    def test_defaults(self):
        """Test settings with no environment variables."""
        settings = SpecFlowSettings.from_env({})

        assert settings.title_max_length == 50
        assert settings.strict_transitions is True
        assert settings.log_level == "INFO"
        assert settings.log_file is None

    def test_reads_process_environment(self, monkeypatch):
        """Test that os.environ is used when no mapping is passed."""
        monkeypatch.setenv("SPECFLOW_TITLE_MAX_LENGTH", "20")
        monkeypatch.setenv("SPECFLOW_LOG_LEVEL", "debug")

        settings = SpecFlowSettings.from_env()

        assert settings.title_max_length == 20
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw, expected", [("0", False), ("off", False), ("No", False), ("1", True), ("yes", True)])
    def test_strict_transitions_flag(self, raw, expected):
        """Test boolean parsing of the strictness flag."""
        settings = SpecFlowSettings.from_env({"SPECFLOW_STRICT_TRANSITIONS": raw})

        assert settings.strict_transitions is expected

    def test_log_file(self, tmp_path):
        """Test the JSON log file path."""
        target = tmp_path / "specflow.log"

        settings = SpecFlowSettings.from_env({"SPECFLOW_LOG_FILE": str(target)})

        assert settings.log_file == Path(target)

    def test_invalid_title_length(self):
        """Test that non-numeric lengths are rejected."""
        with pytest.raises(ValueError, match="SPECFLOW_TITLE_MAX_LENGTH must be an integer"):
            SpecFlowSettings.from_env({"SPECFLOW_TITLE_MAX_LENGTH": "fifty"})

    def test_non_positive_title_length(self):
        """Test that zero lengths are rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            SpecFlowSettings.from_env({"SPECFLOW_TITLE_MAX_LENGTH": "0"})

    def test_invalid_strict_flag(self):
        """Test that unrecognised flag values are rejected."""
        with pytest.raises(ValueError, match="SPECFLOW_STRICT_TRANSITIONS"):
            SpecFlowSettings.from_env({"SPECFLOW_STRICT_TRANSITIONS": "maybe"})

    def test_invalid_log_level(self):
        """Test that unknown logging levels are rejected at load time."""
        with pytest.raises(ValueError, match="SPECFLOW_LOG_LEVEL must be a logging level name, got 'verbose'"):
            SpecFlowSettings.from_env({"SPECFLOW_LOG_LEVEL": "verbose"})

    def test_blank_log_level_uses_default(self):
        """Test that a blank level falls back to INFO."""
        assert SpecFlowSettings.from_env({"SPECFLOW_LOG_LEVEL": "  "}).log_level == "INFO"
