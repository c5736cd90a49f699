from kie.stringutil import format_map


def test_format_is_order_independent():
    s = format_map({"service": "a", "version": "1"})
    s2 = format_map({"version": "1", "service": "a"})
    assert s == s2


def test_format_none():
    assert format_map(None) == "none"
    assert format_map({}) == "none"


def test_format_value():
    assert format_map({"version": "1", "service": "a"}) == "service=a::version=1"


def test_format_single():
    assert format_map({"env": "test"}) == "env=test"