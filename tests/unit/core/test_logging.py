import pytest
import structlog

from tournament_client.core.config.settings import Settings
from tournament_client.core.logging import configure_logging, mask_token


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_logging_renders_event_and_level(capsys):
    configure_logging(Settings(_env_file=None, LOG_JSON=True, LOG_LEVEL="INFO"))

    structlog.get_logger("test").info("token_refresh_started", pending=2)

    output = capsys.readouterr().out
    assert '"event": "token_refresh_started"' in output
    assert '"level": "info"' in output
    assert '"pending": 2' in output


def test_messages_below_level_are_dropped(capsys):
    configure_logging(Settings(_env_file=None, LOG_JSON=True, LOG_LEVEL="WARNING"))

    logger = structlog.get_logger("test")
    logger.info("request_queued_for_refresh")
    logger.warning("refresh_wait_timed_out")

    output = capsys.readouterr().out
    assert "request_queued_for_refresh" not in output
    assert "refresh_wait_timed_out" in output


def test_unknown_level_falls_back_to_info(capsys):
    configure_logging(Settings(_env_file=None, LOG_JSON=True, LOG_LEVEL="chatty"))

    logger = structlog.get_logger("test")
    logger.debug("hidden")
    logger.info("shown")

    output = capsys.readouterr().out
    assert "hidden" not in output
    assert "shown" in output


@pytest.mark.parametrize(
    "token,visible,expected",
    [
        (None, 10, ""),
        ("", 10, ""),
        ("short", 10, "*****"),
        ("abcdefghijklmnop", 10, "abcdefghij******"),
        ("Bearer abc.def", 11, "Bearer abc.***"),
    ],
)
def test_mask_token(token, visible, expected):
    assert mask_token(token, visible=visible) == expected
