from __future__ import annotations

import logging

import pytest

from notoize.logging import FontPipelineLogger


def test_messages_reach_stderr_and_stdlib_logger(
    capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    logger = FontPipelineLogger()
    with caplog.at_level(logging.DEBUG, logger="notoize"):
        logger.info("Loaded %d blocks", 3)
        logger.debug("hidden %s", "detail")
        logger.warning("careful")
    err = capsys.readouterr().err
    assert "Loaded 3 blocks" in err
    assert "careful" in err
    assert "hidden detail" not in err
    assert "hidden detail" in caplog.text


def test_quiet_logger_and_noop_progress(capsys: pytest.CaptureFixture[str]) -> None:
    logger = FontPipelineLogger(quiet=True)
    logger.info("nothing to see")
    with logger.progress("Fetching", total=2) as advance:
        advance(2)
    assert capsys.readouterr().err == ""


def test_bad_format_arguments_are_appended() -> None:
    logger = FontPipelineLogger(quiet=True)
    assert logger._render_message("%d blocks", ("many",)) == "%d blocks many"
