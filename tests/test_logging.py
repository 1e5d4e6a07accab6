import json

import structlog

from qt_deploy.utils.logging import bind_deploy_context, setup_logging


def test_structured_logs_include_deploy_context(capsys):
    setup_logging("INFO", "json")
    bind_deploy_context("/build/my-binary", "/tmp/deploy")

    logger = structlog.get_logger()
    logger.info("test_event", foo="bar")
    out = capsys.readouterr().out.strip().splitlines()[-1]
    data = json.loads(out)
    assert data["event"] == "test_event"
    assert data["binary"] == "/build/my-binary"
    assert data["deployDir"] == "/tmp/deploy"
    assert data["foo"] == "bar"
    assert data["level"] == "info"


def test_log_level_filters_debug(capsys):
    setup_logging("INFO", "json")

    logger = structlog.get_logger()
    logger.debug("hidden_event")
    logger.error("shown_event")
    out = capsys.readouterr().out
    assert "hidden_event" not in out
    assert "shown_event" in out


def test_console_format(capsys):
    setup_logging("DEBUG", "console")

    structlog.get_logger().info("console_event", subdir="platforms")
    out = capsys.readouterr().out
    assert "console_event" in out
    assert "subdir=platforms" in out
