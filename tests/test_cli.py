"""Tests for the logalizer CLI."""

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from logalizer.cli.main import app, configure_logging

cli = CliRunner()


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_text("boot ok\nERROR disk\n")
    return path


@pytest.fixture
def root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestRunCommand:
    """Tests for option handling, with the viewer patched out."""

    def test_help(self):
        result = cli.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "--filter" in result.output

    def test_input_required(self):
        result = cli.invoke(app, [])

        assert result.exit_code == 2

    @patch("logalizer.cli.main.configure_logging")
    def test_invalid_filter_pattern(self, mock_logging, input_file):
        result = cli.invoke(app, ["-i", str(input_file), "-f", "bad:("])

        assert result.exit_code == 1
        assert "Error" in result.output

    @patch("logalizer.cli.main.configure_logging")
    def test_filter_without_separator(self, mock_logging, input_file):
        result = cli.invoke(app, ["-i", str(input_file), "-f", "nocolon"])

        assert result.exit_code == 1
        assert "nocolon" in result.output

    @patch("logalizer.cli.main.Viewer")
    @patch("logalizer.cli.main.configure_logging")
    def test_runs_viewer(self, mock_logging, mock_viewer, input_file):
        result = cli.invoke(
            app, ["-i", str(input_file), "-f", "err:.*ERROR.*", "-e", "err:echo"]
        )

        assert result.exit_code == 0
        mock_viewer.return_value.run.assert_called_once()
        model = mock_viewer.call_args.args[0]
        assert [tab.name for tab in model.get_tabs()] == ["err", str(input_file)]

    @patch("logalizer.cli.main.Viewer")
    @patch("logalizer.cli.main.configure_logging")
    def test_unbound_command_warns(self, mock_logging, mock_viewer, input_file):
        result = cli.invoke(app, ["-i", str(input_file), "-e", "missing:echo"])

        assert result.exit_code == 0
        assert "no filter named 'missing'" in result.output

    @patch("logalizer.cli.main.Viewer")
    @patch("logalizer.cli.main.configure_logging")
    def test_ctrl_c_exits_cleanly(self, mock_logging, mock_viewer, input_file):
        mock_viewer.return_value.run.side_effect = KeyboardInterrupt

        result = cli.invoke(app, ["-i", str(input_file)])

        assert result.exit_code == 0
        stop = mock_viewer.call_args.args[2]
        assert stop.is_set()

    @patch("logalizer.cli.main.Viewer")
    @patch("logalizer.cli.main.configure_logging")
    def test_options_override_settings(self, mock_logging, mock_viewer, input_file, tmp_path):
        log_file = tmp_path / "viewer.log"

        cli.invoke(
            app,
            [
                "-i", str(input_file),
                "--no-comments",
                "--command-timeout", "3",
                "--log-file", str(log_file),
                "--log-level", "DEBUG",
            ],
        )

        settings = mock_viewer.call_args.args[1]
        assert settings.show_comments is False
        assert settings.command_timeout == 3.0
        mock_logging.assert_called_once_with("DEBUG", log_file)


class TestConfigureLogging:
    """Tests for log routing."""

    def test_log_file_receives_debug(self, root_logger, tmp_path):
        log_file = tmp_path / "viewer.log"

        configure_logging("debug", log_file)
        logging.getLogger("logalizer.test").debug("hello from test")
        for handler in root_logger.handlers:
            handler.flush()

        assert "hello from test" in log_file.read_text()

    def test_without_file_only_warnings(self, root_logger):
        configure_logging("DEBUG", None)

        assert root_logger.level == logging.WARNING
