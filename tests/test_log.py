"""
Tests for the logging helpers.
"""

import io
import json
import logging

from ysttxt.log import BASE_LOGGER, JsonLogFormatter, get_logger


class TestGetLogger:
    def test_namespaced(self):
        assert get_logger("engine").name == "ysttxt.engine"

    def test_base(self):
        assert get_logger().name == BASE_LOGGER

    def test_already_qualified(self):
        assert get_logger("ysttxt.resolver").name == "ysttxt.resolver"


class TestJsonLogFormatter:
    def test_fields(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(JsonLogFormatter())
        logger = logging.getLogger("ysttxt.test_json")
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            logger.info("rendered %s", "catalog", extra={"context": {"entries": 3}})
        finally:
            logger.removeHandler(handler)
        payload = json.loads(stream.getvalue())
        assert payload["level"] == "INFO"
        assert payload["module"] == "ysttxt.test_json"
        assert payload["msg"] == "rendered catalog"
        assert payload["ctx"] == {"entries": 3}
