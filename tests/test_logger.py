import json
import logging

import pytest

from orchard.utils.logger import JSONFormatter, setup_logging


def _own_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_orchard_handler", False)]


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in _own_handlers():
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)


def test_setup_logging_is_idempotent(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "orchard.log"
    setup_logging("DEBUG", "text", str(log_file))
    setup_logging("DEBUG", "json", str(log_file))
    assert len(_own_handlers()) == 2
    assert all(isinstance(h.formatter, JSONFormatter) for h in _own_handlers())
    assert logging.getLogger().level == logging.DEBUG

    logging.getLogger("orchard.test").info("hello", extra={"user_id": "u1"})
    for handler in _own_handlers():
        handler.flush()
    line = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert line["message"] == "hello"
    assert line["user_id"] == "u1"


def test_json_formatter_includes_extras():
    record = logging.LogRecord("orchard.test", logging.INFO, __file__, 1, "Fruit created", None, None)
    record.user_id = "u1"
    record.fruit_id = "f1"
    line = json.loads(JSONFormatter().format(record))
    assert line["message"] == "Fruit created"
    assert line["level"] == "INFO"
    assert line["user_id"] == "u1"
    assert line["fruit_id"] == "f1"
    assert "path" not in line
