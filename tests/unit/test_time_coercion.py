from datetime import date, datetime, timedelta, timezone

from timeless.utils.time import UTC, from_input_value, get_zone, to_input_value, to_instant

IST = timezone(timedelta(hours=5, minutes=30))


class StoreTimestamp:
    """Mimics a store-native timestamp with a to-date capability"""

    def __init__(self, value):
        self._value = value

    def to_datetime(self):
        return self._value


class BrokenTimestamp:
    def ToDatetime(self):
        raise RuntimeError("corrupt")


def test_to_instant_none_and_blank():
    assert to_instant(None) is None
    assert to_instant("") is None
    assert to_instant("   ") is None


def test_to_instant_rejects_numbers_and_garbage():
    assert to_instant(1700000000) is None
    assert to_instant(1.5) is None
    assert to_instant(True) is None
    assert to_instant("not a date") is None
    assert to_instant({"seconds": 10}) is None


def test_to_instant_iso_string_with_z():
    result = to_instant("2026-03-01T10:00:00Z")
    assert result == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)
    assert result.tzinfo == UTC


def test_to_instant_naive_values_read_in_given_zone():
    assert to_instant("2026-03-01T10:00", naive_tz=IST) == datetime(2026, 3, 1, 4, 30, tzinfo=UTC)
    assert to_instant(datetime(2026, 3, 1, 10, 0)) == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)


def test_to_instant_normalizes_offsets_to_utc():
    result = to_instant(datetime(2026, 3, 1, 10, 0, tzinfo=IST))
    assert result == datetime(2026, 3, 1, 4, 30, tzinfo=UTC)
    assert result.utcoffset() == timedelta(0)


def test_to_instant_date_is_midnight():
    assert to_instant(date(2026, 3, 1)) == datetime(2026, 3, 1, tzinfo=UTC)


def test_to_instant_uses_to_date_capability():
    wrapped = StoreTimestamp(datetime(2026, 3, 1, 9, 15, tzinfo=UTC))
    assert to_instant(wrapped) == datetime(2026, 3, 1, 9, 15, tzinfo=UTC)


def test_to_instant_capability_failures_give_none():
    assert to_instant(BrokenTimestamp()) is None
    assert to_instant(StoreTimestamp("2026-03-01")) is None


def test_to_instant_overflow_gives_none():
    assert to_instant(datetime.min.replace(tzinfo=IST)) is None


def test_input_value_round_trip_in_display_zone():
    instant = datetime(2026, 3, 1, 4, 30, tzinfo=UTC)
    assert to_input_value(instant, IST) == "2026-03-01T10:00"
    assert from_input_value("2026-03-01T10:00", IST) == instant


def test_input_value_blank_and_invalid():
    assert to_input_value(None) == ""
    assert to_input_value("garbage") == ""
    assert from_input_value("") is None
    assert from_input_value(None) is None
    assert from_input_value("tomorrow-ish") is None


def test_get_zone_falls_back_to_utc():
    assert get_zone("Nowhere/Invalid") is UTC
