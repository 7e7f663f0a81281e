"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest

from proclog.utils.config import Config, get_config, parse_bytes, reset_config


class TestParseBytes:
    """Test byte-size parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (512, 512),
            ("512", 512),
            ("64KB", 64 * 1024),
            ("50MB", 50 * 1024 * 1024),
            ("1GB", 1024 * 1024 * 1024),
            (" 2 MB ", 2 * 1024 * 1024),
            ("10mb", 10 * 1024 * 1024),
        ],
    )
    def test_valid_sizes(self, value, expected):
        """Test supported notations."""
        assert parse_bytes(value, default=-1) == expected

    @pytest.mark.parametrize("value", [None, "", "lots", "5TB", "MB", True])
    def test_invalid_sizes_use_default(self, value):
        """Test fallback to the default."""
        assert parse_bytes(value, default=99) == 99


class TestConfig:
    """Test Config."""

    @pytest.fixture
    def config_file(self):
        """Write a user configuration file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "proclog.yaml"
            path.write_text(
                "logfile:\n"
                "  backups: 3\n"
                "programs:\n"
                "  web:\n"
                "    stdout_logfile: /var/log/web.log, /dev/stdout\n"
                "    stdout_logfile_maxbytes: 1MB\n"
            )
            yield str(path)

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        """Remove environment overrides."""
        for name in ("PROCLOG_LOG_LEVEL", "PROCLOG_LOG_FORMAT", "PROCLOG_MAXBYTES", "PROCLOG_BACKUPS"):
            monkeypatch.delenv(name, raising=False)
        reset_config()
        yield
        reset_config()

    def test_defaults(self):
        """Test the bundled defaults."""
        config = Config()

        assert config.get("logging.level") == "INFO"
        assert config.get_bytes("logfile.maxbytes", 0) == 50 * 1024 * 1024
        assert config.get("logfile.backups") == 10

    def test_user_file_merges_over_defaults(self, config_file):
        """Test deep merge of a user file."""
        config = Config(config_file)

        assert config.get("logfile.backups") == 3
        assert config.get_bytes("logfile.maxbytes", 0) == 50 * 1024 * 1024
        assert config.get("programs.web.stdout_logfile") == "/var/log/web.log, /dev/stdout"
        assert config.get_bytes("programs.web.stdout_logfile_maxbytes", 0) == 1024 * 1024

    def test_env_overrides(self, monkeypatch):
        """Test environment variable overrides."""
        monkeypatch.setenv("PROCLOG_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PROCLOG_MAXBYTES", "4KB")
        monkeypatch.setenv("PROCLOG_BACKUPS", "2")

        config = Config()

        assert config.get("logging.level") == "DEBUG"
        assert config.get_bytes("logfile.maxbytes", 0) == 4096
        assert config.get("logfile.backups") == 2

    def test_get_missing_key(self):
        """Test default for missing keys."""
        assert Config().get("programs.nope.stdout_logfile", "fallback") == "fallback"

    def test_set_creates_sections(self):
        """Test dot-notation set."""
        config = Config()
        config.set("programs.api.syslog_tag", "api")

        assert config.to_dict()["programs"]["api"]["syslog_tag"] == "api"

    def test_global_config(self):
        """Test the global instance helpers."""
        first = get_config()

        assert get_config() is first

        reset_config()

        assert get_config() is not first
