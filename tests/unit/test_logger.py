"""
Tests for the structured grid logger.

Tests cover log level filtering, warning and condition output, click
outcomes, statistics formatting, and custom stream output.
"""

from io import StringIO

from explvis.core.registry import UnregisteredFormula
from explvis.utils.logger import GridLogger, LogLevel


# ---------------------------------------------------------------------------
# Tests: Log Level Filtering
# ---------------------------------------------------------------------------


class TestLogLevelFiltering:
    """Test that log levels filter messages correctly."""

    def test_silent_suppresses_all(self) -> None:
        """SILENT level produces no output."""
        buf = StringIO()
        logger = GridLogger(level=LogLevel.SILENT, stream=buf)
        logger.debug("debug msg")
        logger.info("info msg")
        logger.warning("warn msg")
        assert buf.getvalue() == ""

    def test_normal_shows_warnings_only(self) -> None:
        buf = StringIO()
        logger = GridLogger(level=LogLevel.NORMAL, stream=buf)
        logger.debug("debug msg")
        logger.info("info msg")
        logger.warning("warn msg")
        assert buf.getvalue() == "[WARN] warn msg\n"

    def test_verbose_hides_debug(self) -> None:
        """VERBOSE level does NOT show debug messages."""
        buf = StringIO()
        logger = GridLogger(level=LogLevel.VERBOSE, stream=buf)
        logger.debug("detailed debug info")
        logger.info("progress update")
        assert buf.getvalue() == "[INFO] progress update\n"

    def test_debug_shows_everything(self) -> None:
        """DEBUG level shows all messages."""
        buf = StringIO()
        logger = GridLogger(level=LogLevel.DEBUG, stream=buf)
        logger.debug("debug msg")
        logger.info("info msg")
        output = buf.getvalue()
        assert "debug msg" in output
        assert "info msg" in output


# ---------------------------------------------------------------------------
# Tests: Formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    """Test message formatting."""

    def test_kwargs_indented(self) -> None:
        buf = StringIO()
        GridLogger(LogLevel.NORMAL, buf).warning("oops", tp=3, column=1)
        assert buf.getvalue().splitlines() == ["[WARN] oops", "  tp: 3", "  column: 1"]

    def test_condition(self) -> None:
        buf = StringIO()
        GridLogger(LogLevel.NORMAL, buf).condition(UnregisteredFormula("X", 2))
        output = buf.getvalue()
        assert output.startswith("[WARN] UnregisteredFormula:")
        assert "'X'" in output
        assert "tp=2" in output

    def test_click_processed(self) -> None:
        buf = StringIO()
        logger = GridLogger(LogLevel.VERBOSE, buf)
        logger.click_processed(5, 2, 0)
        assert buf.getvalue() == "[CLICK] tp=5: 2 cell(s) updated, 0 condition(s)\n"

    def test_click_hidden_at_normal(self) -> None:
        buf = StringIO()
        GridLogger(LogLevel.NORMAL, buf).click_processed(5, 2, 0)
        assert buf.getvalue() == ""

    def test_statistics(self) -> None:
        buf = StringIO()
        GridLogger(LogLevel.VERBOSE, buf).statistics({"cells_updated": 4, "rows": 6})
        lines = buf.getvalue().splitlines()
        assert lines[0] == "=== Statistics ==="
        assert "  Cells Updated: 4" in lines
        assert "  Rows: 6" in lines

    def test_default_level_is_normal(self) -> None:
        assert GridLogger().level is LogLevel.NORMAL
