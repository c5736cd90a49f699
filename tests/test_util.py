from kie.util import (
    ERR_INTERNAL,
    ServiceError,
    is_contain_label,
    is_equivalent_label,
    svc_err,
)


def test_is_equivalent_label():
    m1 = None
    m2 = {}
    m3 = {"foo": "bar"}
    m4 = {"foo": "bar"}
    m5 = {"bar": "foo"}
    assert is_equivalent_label(m1, m1) is True
    assert is_equivalent_label(m1, m2) is True
    assert is_equivalent_label(m2, m3) is False
    assert is_equivalent_label(m3, m4) is True
    assert is_equivalent_label(m3, m5) is False


def test_is_equivalent_label_different_sizes():
    assert is_equivalent_label({"foo": "bar", "a": "b"}, {"foo": "bar"}) is False


def test_is_contain_label():
    assert is_contain_label({"a": "1", "b": "2"}, {"a": "1"}) is True
    assert is_contain_label({"a": "1", "b": "2"}, {}) is True
    assert is_contain_label({"a": "1"}, {"a": "2"}) is False
    assert is_contain_label({"a": "1"}, {"a": "1", "b": "2"}) is False
    assert is_contain_label({"a": "1", "b": "2"}, {"c": "3"}) is False
    assert is_contain_label(None, None) is True


def test_svc_err_keeps_service_error():
    err = ServiceError(400, "bad")
    assert svc_err(err) is err


def test_svc_err_wraps_other_errors():
    wrapped = svc_err(ValueError("boom"))
    assert isinstance(wrapped, ServiceError)
    assert wrapped.code == ERR_INTERNAL
    assert wrapped.message == "boom"
    assert str(wrapped) == "boom"