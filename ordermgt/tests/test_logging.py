import json
import logging

from ordermgt.app.core.config import Settings
from ordermgt.app.core.logging import JsonLineFormatter, setup_logging


def test_setup_logging_uses_settings_level_and_format():
    handler = setup_logging(Settings(log_level="debug", log_format="json"))
    assert logging.getLogger().level == logging.DEBUG
    assert isinstance(handler.formatter, JsonLineFormatter)


def test_uvicorn_loggers_do_not_propagate_to_root():
    handler = setup_logging(Settings())
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        assert lg.handlers == [handler]
        assert lg.propagate is False


def test_unknown_level_falls_back_to_info():
    setup_logging(Settings(log_level="chatty"))
    assert logging.getLogger().level == logging.INFO


def test_json_line_shape():
    record = logging.LogRecord("ordermgt", logging.INFO, __file__, 1, "order %s created", ("1",), None)
    doc = json.loads(JsonLineFormatter().format(record))
    assert doc["msg"] == "order 1 created"
    assert doc["level"] == "INFO"
    assert doc["logger"] == "ordermgt"
