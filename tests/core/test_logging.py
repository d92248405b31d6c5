"""Tests for logging module."""

import io
import json
import re

import pytest

from sockstat.core.logging import ConsoleLogger


LINE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - [A-Z]+ - .+$")


class TestConsoleLogger:
    """Tests for ConsoleLogger class."""

    def test_line_format(self):
        """Lines look like 'YYYY-MM-DD HH:MM:SS - LEVEL - message'."""
        stdout = io.StringIO()
        logger = ConsoleLogger(stdout=stdout)

        logger.info("Reading socket statistics")

        line = stdout.getvalue().rstrip("\n")
        assert LINE_PATTERN.match(line)
        assert line.endswith(" - INFO - Reading socket statistics")

    def test_errors_go_to_stderr(self):
        """ERROR is written to stderr only."""
        stdout, stderr = io.StringIO(), io.StringIO()
        logger = ConsoleLogger(stdout=stdout, stderr=stderr)

        logger.error("Failed to retrieve socket summary")

        assert stdout.getvalue() == ""
        assert "ERROR - Failed to retrieve socket summary" in stderr.getvalue()

    def test_warnings_go_to_stdout(self):
        """Non-error levels are written to stdout."""
        stdout, stderr = io.StringIO(), io.StringIO()
        logger = ConsoleLogger(min_level="debug", stdout=stdout, stderr=stderr)

        logger.debug("d")
        logger.info("i")
        logger.warning("w")

        assert stderr.getvalue() == ""
        assert len(stdout.getvalue().splitlines()) == 3

    def test_threshold_filters_lower_levels(self):
        """Messages below the threshold are dropped."""
        stdout, stderr = io.StringIO(), io.StringIO()
        logger = ConsoleLogger(min_level="WARNING", stdout=stdout, stderr=stderr)

        logger.debug("hidden")
        logger.info("hidden")
        logger.warning("shown")
        logger.error("shown too")

        assert "hidden" not in stdout.getvalue()
        assert "WARNING - shown" in stdout.getvalue()
        assert "ERROR - shown too" in stderr.getvalue()

    def test_default_threshold_is_info(self):
        """Debug is hidden by default."""
        stdout = io.StringIO()
        logger = ConsoleLogger(stdout=stdout)

        logger.debug("hidden")

        assert stdout.getvalue() == ""
        assert logger.enabled_for("info")

    def test_rejects_unknown_level(self):
        """Unknown thresholds raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            ConsoleLogger(min_level="verbose")

    def test_uses_sys_streams(self, capsys):
        """Defaults to the current sys.stdout and sys.stderr."""
        logger = ConsoleLogger()

        logger.info("to stdout")
        logger.error("to stderr")

        captured = capsys.readouterr()
        assert "to stdout" in captured.out
        assert "to stderr" in captured.err


class TestJsonlMirror:
    """Tests for the JSONL log file."""

    def test_logs_to_file(self, tmp_path):
        """Writes emitted entries to the JSONL file."""
        log_path = tmp_path / "logs" / "sockstat.jsonl"
        with ConsoleLogger(log_path=log_path, stdout=io.StringIO()) as logger:
            logger.info("Test message")

        entry = json.loads(log_path.read_text().strip())
        assert entry["level"] == "info"
        assert entry["message"] == "Test message"
        assert entry["logger"] == "sockstat"
        assert "T" in entry["timestamp"]

    def test_file_honours_threshold(self, tmp_path):
        """Filtered messages are not written to the file either."""
        log_path = tmp_path / "sockstat.jsonl"
        with ConsoleLogger(min_level="error", log_path=log_path, stderr=io.StringIO()) as logger:
            logger.info("skipped")
            logger.error("kept")

        lines = log_path.read_text().strip().split("\n")
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "kept"

    def test_logs_extra_data(self, tmp_path):
        """Extra keyword fields are added to the entry."""
        log_path = tmp_path / "sockstat.jsonl"
        with ConsoleLogger(log_path=log_path, stdout=io.StringIO()) as logger:
            logger.info("Read complete", elapsed=0.25)

        entry = json.loads(log_path.read_text().strip())
        assert entry["elapsed"] == 0.25

    def test_appends_across_loggers(self, tmp_path):
        """Entries from separate runs accumulate."""
        log_path = tmp_path / "sockstat.jsonl"
        for message in ("first", "second"):
            with ConsoleLogger(log_path=log_path, stdout=io.StringIO()) as logger:
                logger.info(message)

        messages = [json.loads(line)["message"] for line in log_path.read_text().splitlines()]
        assert messages == ["first", "second"]

    def test_open_creates_file(self, tmp_path):
        """open() creates the log file before anything is logged."""
        log_path = tmp_path / "logs" / "sockstat.jsonl"
        with ConsoleLogger(log_path=log_path) as logger:
            logger.open()
            assert log_path.exists()

    def test_open_without_log_path(self):
        """open() is a no-op when there is no log file."""
        ConsoleLogger().open()

    def test_open_raises_when_not_creatable(self, tmp_path):
        """open() surfaces OSError for paths under a regular file."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        logger = ConsoleLogger(log_path=blocker / "sockstat.jsonl")

        with pytest.raises(OSError):
            logger.open()

    def test_no_file_without_messages(self, tmp_path):
        """The file is only created once something is logged."""
        log_path = tmp_path / "sockstat.jsonl"
        with ConsoleLogger(log_path=log_path):
            pass

        assert not log_path.exists()
