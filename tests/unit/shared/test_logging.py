"""Unit tests for swarmcity_cli.shared.logging module."""

import json

import pytest

from swarmcity_cli.shared.logging import configure_logging, get_logger


@pytest.mark.cli_unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_lines_appended_to_file(self, tmp_path):
        """Test entries are written as JSON with a level tag."""
        log_file = tmp_path / "swarmCity.log"
        log_file.write_text("")

        configure_logging("info", log_file=log_file)
        get_logger("test").info("docker-compose ps", returncode=0)
        get_logger("test").error("command failed", returncode=1)

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert lines[0]["event"] == "docker-compose ps"
        assert lines[0]["level"] == "info"
        assert lines[1]["level"] == "error"
        assert lines[1]["returncode"] == 1

    def test_existing_entries_kept(self, tmp_path):
        """Test the log file is appended to, not truncated."""
        log_file = tmp_path / "swarmCity.log"
        log_file.write_text('{"event": "earlier"}\n')

        configure_logging("info", log_file=log_file)
        get_logger("test").info("later")

        content = log_file.read_text()
        assert content.startswith('{"event": "earlier"}')
        assert "later" in content

    def test_level_filters_debug(self, tmp_path):
        """Test debug entries are dropped at info level."""
        log_file = tmp_path / "swarmCity.log"

        configure_logging("info", log_file=log_file)
        get_logger("test").debug("hidden")

        assert "hidden" not in log_file.read_text()

    def test_stderr_without_log_file(self, capsys):
        """Test entries go to stderr as JSON when no log file is given."""
        configure_logging("info")
        get_logger("test").info("pulling images", service="site")

        entry = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert entry["event"] == "pulling images"
        assert entry["service"] == "site"

    def test_reconfigure_switches_file(self, tmp_path):
        """Test a logger created earlier follows a later configure_logging call."""
        logger = get_logger("test")
        first, second = tmp_path / "first.log", tmp_path / "second.log"

        configure_logging("info", log_file=first)
        logger.info("one")
        configure_logging("info", log_file=second)
        logger.info("two")

        assert "two" not in first.read_text()
        assert "two" in second.read_text()
