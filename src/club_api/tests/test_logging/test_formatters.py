import json
import logging
import sys

from club_api.core.logging.formatters import ColorFormatter, JsonFormatter


def _record(msg="cache.hit", level=logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("club_api.cache", level, __file__, 10, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:

    def test_base_fields_and_extras(self):
        formatter = JsonFormatter(env="testing", service="club-api")

        line = formatter.format(_record(request_id="r-1", key="sports", ttl=60))
        payload = json.loads(line)

        assert payload["message"] == "cache.hit"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "club_api.cache"
        assert payload["service"] == "club-api"
        assert payload["env"] == "testing"
        assert payload["request_id"] == "r-1"
        assert payload["key"] == "sports"
        assert payload["ttl"] == 60

    def test_non_serializable_extra_is_stringified(self):
        formatter = JsonFormatter()

        payload = json.loads(formatter.format(_record(fields={"name"})))

        assert payload["fields"] == str({"name"})

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        payload = json.loads(JsonFormatter().format(_record(level=logging.ERROR, exc_info=exc_info)))

        assert "RuntimeError: boom" in payload["exc_info"]


class TestColorFormatter:

    def test_line_layout(self):
        line = ColorFormatter().format(_record(request_id="r-9"))

        assert "\033[32m" in line
        assert "club_api.cache" in line
        assert "r-9" in line
        assert line.endswith("cache.hit")
