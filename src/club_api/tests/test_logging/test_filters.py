import logging

from club_api.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("club_api.test", logging.INFO, __file__, 1, "event", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestRequestIdFilter:

    def test_defaults_to_dash(self):
        record = _record()
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "-"

    def test_uses_context_value(self):
        token = set_request_id("abc-123")
        try:
            record = _record()
            RequestIdFilter().filter(record)
        finally:
            reset_request_id(token)

        assert record.request_id == "abc-123"
        assert get_request_id() is None

    def test_explicit_extra_wins(self):
        token = set_request_id("from-context")
        try:
            record = _record(request_id="explicit")
            RequestIdFilter().filter(record)
        finally:
            reset_request_id(token)

        assert record.request_id == "explicit"


class TestRedactFilter:

    def test_masks_sensitive_extras(self):
        record = _record(password="hunter2", Authorization="Bearer x", redis_url="redis://:pw@host", sport_id=3)

        assert RedactFilter().filter(record) is True

        assert record.password == RedactFilter.MASK
        assert record.Authorization == RedactFilter.MASK
        assert record.redis_url == RedactFilter.MASK
        assert record.sport_id == 3
