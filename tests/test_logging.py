from __future__ import annotations

import io
import json
import logging

from study_planner.core.config import Settings
from study_planner.core.context import bind_request_id, bind_user_id, reset_request_id
from study_planner.core.logging import configure_logging


def test_configure_logging_outputs_json_with_request_id() -> None:
    settings = Settings(environment="test", log_level="INFO")
    configure_logging(settings)

    root_logger = logging.getLogger()
    handler = next(
        (h for h in root_logger.handlers if isinstance(h, logging.StreamHandler)),
        None,
    )
    assert handler is not None, "Expected JSON stream handler to be configured"

    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)

    token = bind_request_id("req-json-1")
    user_token = bind_user_id("665f1b9a9b1e8a3d4c5b6a70")
    try:
        logger = logging.getLogger("study_planner.tests.logging")
        logger.info("structured log event", extra={"task_id": "abc", "xp": 15})
    finally:
        handler.flush()
        user_token.var.reset(user_token)
        reset_request_id(token)
        handler.setStream(previous_stream)

    log_lines = buffer.getvalue().strip().splitlines()
    assert log_lines, "Expected structured log line to be captured"
    payload = json.loads(log_lines[-1])

    assert payload["message"] == "structured log event"
    assert payload["request_id"] == "req-json-1"
    assert payload["user_id"] == "665f1b9a9b1e8a3d4c5b6a70"
    assert payload["environment"] == "test"
    assert payload["level"] == "INFO"
    assert payload["task_id"] == "abc"
    assert payload["xp"] == 15
    assert payload["service"] == settings.project_name


def test_uvicorn_loggers_share_the_json_handler() -> None:
    configure_logging(Settings(environment="ci"))

    access_logger = logging.getLogger("uvicorn.access")
    assert access_logger.propagate is False
    assert access_logger.level == logging.INFO
    assert access_logger.handlers == logging.getLogger().handlers
