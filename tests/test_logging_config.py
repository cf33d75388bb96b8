import json
import logging

from nodit_mcp.config import default_config
from nodit_mcp.server import JsonFormatter


def test_logging_level_config():
    level = getattr(logging, default_config.log_level.upper(), logging.INFO)
    assert level in (
        logging.DEBUG,
        logging.INFO,
        logging.WARNING,
        logging.ERROR,
        logging.CRITICAL,
    )


def test_json_formatter_includes_tool_context():
    record = logging.LogRecord("nodit", logging.WARNING, __file__, 1, "tool failed %s", ("x",), None)
    record.tool = "call_nodit_api"
    record.operation_id = "eth_call"
    payload = json.loads(JsonFormatter().format(record))
    assert payload == {
        "level": "WARNING",
        "message": "tool failed x",
        "name": "nodit",
        "tool": "call_nodit_api",
        "operation_id": "eth_call",
    }
