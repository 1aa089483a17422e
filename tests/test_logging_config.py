import json
import logging

from capacity_planning.logging_config import JSONFormatter, setup_logging


def make_record(**extra):
    record = logging.LogRecord("capacity_planning.workload", logging.INFO, __file__, 10,
                               "Upcoming leave for %s", ("c1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_carries_capacity_context():
    entry = json.loads(JSONFormatter().format(make_record(consultant_id="c1", months=6)))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "capacity_planning.workload"
    assert entry["message"] == "Upcoming leave for c1"
    assert entry["consultant_id"] == "c1"
    assert entry["months"] == 6


def test_json_formatter_omits_absent_context():
    entry = json.loads(JSONFormatter().format(make_record()))

    assert "consultant_id" not in entry
    assert "months" not in entry


def test_setup_logging_installs_single_stdout_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        handler = setup_logging("debug", json_output=False)

        assert root.handlers == [handler]
        assert root.level == logging.DEBUG
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
