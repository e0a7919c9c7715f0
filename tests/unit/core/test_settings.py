"""Tests for environment-driven settings and their mapping to engine configs."""

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.core.logging import configure_logging
from app.intelligence.activity import AnalyzerConfig
from app.intelligence.ranking import RankerConfig


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ANALYSIS_WINDOW_DAYS", raising=False)
        monkeypatch.delenv("DEFAULT_RECOMMENDATION_COUNT", raising=False)
        s = Settings(_env_file=None)
        assert s.ANALYSIS_WINDOW_DAYS == 31
        assert s.DEFAULT_RECOMMENDATION_COUNT == 5

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_WINDOW_DAYS", "14")
        monkeypatch.setenv("DEFAULT_RECOMMENDATION_COUNT", "3")
        s = Settings(_env_file=None)
        assert s.ANALYSIS_WINDOW_DAYS == 14
        assert s.DEFAULT_RECOMMENDATION_COUNT == 3

    def test_invalid_window_rejected(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_WINDOW_DAYS", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_engine_configs_from_settings(self, monkeypatch):
        monkeypatch.setenv("ANALYSIS_WINDOW_DAYS", "21")
        monkeypatch.setenv("DEFAULT_RECOMMENDATION_COUNT", "8")
        s = Settings(_env_file=None)
        assert AnalyzerConfig.from_settings(s).window_days == 21
        assert RankerConfig.from_settings(s).default_count == 8

    def test_debug_forces_debug_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("DEBUG", "true")
        assert Settings(_env_file=None).effective_log_level == "DEBUG"
        monkeypatch.setenv("DEBUG", "false")
        assert Settings(_env_file=None).effective_log_level == "WARNING"

    def test_engine_import_does_not_read_settings(self):
        """Bad ambient config must not break importing the engine."""
        project_root = Path(__file__).resolve().parents[3]
        env = dict(os.environ, ANALYSIS_WINDOW_DAYS="0", PYTHONPATH=str(project_root))
        code = (
            "import sys\n"
            "import app.intelligence.activity, app.intelligence.ranking\n"
            "assert 'app.core.config' not in sys.modules\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=project_root, env=env, capture_output=True, text=True,
        )
        assert result.returncode == 0, result.stderr


class TestConfigureLogging:

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("chatty")

    def test_accepts_names_and_numbers(self):
        configure_logging("debug")
        configure_logging(logging.WARNING)
