from datetime import timedelta

import pytest

from kie import common


def test_parse_wait_seconds():
    assert common.parse_wait("5s") == timedelta(seconds=5)


def test_parse_wait_milliseconds():
    assert common.parse_wait("100ms") == timedelta(milliseconds=100)


def test_parse_wait_compound_is_sum_of_parts():
    total = common.parse_wait("1m30s")
    assert total == common.parse_wait("1m") + common.parse_wait("30s")


def test_parse_wait_limit_is_inclusive():
    assert common.parse_wait("5m") == common.MAX_WAIT


def test_parse_wait_zero():
    assert common.parse_wait("0") == timedelta(0)


@pytest.mark.parametrize("value", ["5m1s", "6m", "1h", "abc", "", "5", "-1s", "5x"])
def test_parse_wait_rejects(value):
    with pytest.raises(ValueError) as excinfo:
        common.parse_wait(value)
    assert str(excinfo.value) == common.MSG_INVALID_WAIT