import pytest

from kie import datasource
from kie.model import KVDoc


class _FakeBroker:
    def get_revision_dao(self):
        return "revision"

    def get_history_dao(self):
        return "history"

    def get_track_dao(self):
        return "track"

    def get_kv_dao(self):
        return "kv"

    def get_rbac_dao(self):
        return "rbac"


def test_init_uses_registered_plugin():
    broker = _FakeBroker()
    datasource.register_plugin("fake_store", lambda: broker)
    assert datasource.init("fake_store") is broker
    assert datasource.get_broker() is broker
    assert datasource.get_broker().get_kv_dao() == "kv"


def test_init_unknown_kind():
    with pytest.raises(ValueError, match="do not support 'no_such_store'"):
        datasource.init("no_such_store")


def test_init_factory_error_propagates():
    def failing():
        raise ConnectionError("down")

    datasource.register_plugin("broken_store", failing)
    with pytest.raises(ConnectionError, match="down"):
        datasource.init("broken_store")


def test_get_broker_uninitialised(monkeypatch):
    monkeypatch.setattr(datasource, "_broker", None)
    with pytest.raises(RuntimeError):
        datasource.get_broker()


def test_clear_part():
    kv = KVDoc(key="k", value="v", domain="d", project="p", label_format="a=b")
    datasource.clear_part(kv)
    assert (kv.domain, kv.project, kv.label_format) == ("", "", "")
    assert (kv.key, kv.value) == ("k", "v")


def test_tombstone_id():
    kv = KVDoc(key="timeout", label_format="env=prod")
    assert datasource.tombstone_id(kv) == "timeout/env=prod"


def test_error_messages():
    assert str(datasource.KeyNotExistsError()) == "can not find any key value"
    assert str(datasource.RecordNotExistsError()) == "can not find any polling data"
    assert str(datasource.RevisionNotExistError()) == "revision does not exist"
    assert str(datasource.KVAlreadyExistsError()) == "kv already exists"
    assert str(datasource.TooManyError()) == "key with labels should be only one"