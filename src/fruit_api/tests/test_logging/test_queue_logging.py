import logging
from pathlib import Path

from fruit_api.core.logging.builder import get_queue_stats, setup_logging, stop_queue_logging
from fruit_api.core.logging.filters import reset_request_id, set_request_id

from ..test_fixtures.settings_fixtures import make_settings


def test_queue_listener_writes_file(tmp_path):
    settings = make_settings(
        tmp_path,
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="json",
        LOG_TO_STDOUT=False,
        LOG_DIR=tmp_path / "logs",
        LOG_USE_QUEUE=True,
    )
    setup_logging(settings)
    assert get_queue_stats()["queue_present"] is True

    logger = logging.getLogger("fruit_api.test.queue")
    token = set_request_id("test-req-1")
    try:
        for i in range(10):
            logger.info("test message %d", i, extra={"iteration": i})
    finally:
        reset_request_id(token)

    # flushes the queue
    stop_queue_logging()

    text = (Path(settings.LOG_DIR) / "app.log").read_text()
    assert "test message 0" in text
    assert "test message 9" in text
    assert "iteration" in text
    assert "test-req-1" in text
    assert get_queue_stats()["queue_present"] is False


def test_stop_queue_logging_without_listener_is_noop():
    stop_queue_logging()
    stop_queue_logging()
