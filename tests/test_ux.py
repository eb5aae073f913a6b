"""Tests for console output helpers."""

import logging

from codepush_cli.utils.ux import logger, print_error


def test_print_error_logs_plain_text(caplog, capsys):
    logger.propagate = True
    try:
        with caplog.at_level(logging.ERROR, logger="codepush-cli"):
            print_error(r"Run [bold]codepush apps list[/bold] for \[v1]")
    finally:
        logger.propagate = False

    assert caplog.messages == ["Run codepush apps list for [v1]"]
    assert "ERROR: Run codepush apps list for [v1]" in capsys.readouterr().err
