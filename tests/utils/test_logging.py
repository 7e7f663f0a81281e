"""Tests for structured logging setup."""

import json
import tempfile
from pathlib import Path

import pytest
import structlog

from proclog.utils.config import Config
from proclog.utils.logging import (
    add_app_context,
    bind_program,
    configure_from_config,
    configure_logging,
    get_logger,
    unbind_program,
)


class TestLogging:
    """Test logging configuration."""

    def teardown_method(self):
        unbind_program()
        structlog.reset_defaults()

    def test_app_context(self):
        """Test the app field processor."""
        assert add_app_context(None, "info", {})["app"] == "proclog"

    def test_json_to_file(self):
        """Test JSON lines appended to a file with bound program context."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "proclog.log"
            configure_logging(log_level="DEBUG", log_format="json", log_output=str(path))

            bind_program("web", "stdout")
            structlog.get_logger("proclog.test.file").info("rotated", size=10)

            entry = json.loads(path.read_text().strip().splitlines()[-1])

        assert entry["event"] == "rotated"
        assert entry["app"] == "proclog"
        assert entry["program"] == "web"
        assert entry["channel"] == "stdout"
        assert entry["size"] == 10

    def test_unbind_program(self):
        """Test removing bound context."""
        bind_program("web", "stderr")
        unbind_program()

        assert "program" not in structlog.contextvars.get_contextvars()

    def test_unknown_format_rejected(self):
        """Test invalid format names."""
        with pytest.raises(ValueError, match="Unknown log format"):
            configure_logging(log_format="xml")

    def test_configure_from_config(self):
        """Test configuration from a Config instance."""
        config = Config()
        config.set("logging.format", "console")

        configure_from_config(config)

        get_logger("proclog.test").warning("configured", mode="console")
