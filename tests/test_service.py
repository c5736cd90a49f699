import pytest

from kie.auth.decision import (
    NoPermissionError,
    Permission,
    Resource,
    ResourceScope,
    Role,
    RoleNotExistError,
)
from kie.auth.service import (
    Account,
    AccountDeletedError,
    check_create_kv,
    check_delete_kv,
    check_enable,
    check_get_kv,
    check_perm,
    check_update_kv,
    filter_kv_list,
    identify,
)
from kie.config import RBAC
from kie.model import KVDoc


class FakeStore:
    def __init__(self, roles=None, accounts=()):
        self.roles = roles or {}
        self.accounts = set(accounts)

    def get_role(self, name):
        if name not in self.roles:
            raise RoleNotExistError()
        return self.roles[name]

    def account_exist(self, name):
        return name in self.accounts


PROD = {"environment": "production"}


def _store():
    return FakeStore(
        roles={
            "reader": Role(
                name="reader",
                perms=[Permission(resources=[Resource(type="config", labels=dict(PROD))], verbs=["get"])],
            ),
            "writer": Role(
                name="writer",
                perms=[Permission(resources=[Resource(type="config")], verbs=["*"])],
            ),
        },
        accounts={"alice", "bob", "carol"},
    )


ENABLED = RBAC(enabled=True)


def test_check_enable():
    acc = Account(name="alice", roles=["reader"])
    assert check_enable(RBAC(enabled=False), acc) is False
    assert check_enable(RBAC(enabled=True), None) is True
    assert check_enable(RBAC(enabled=True, allow_miss_token=True), None) is False
    assert check_enable(RBAC(enabled=True, allow_miss_token=True), acc) is True


def test_identify_errors():
    store = _store()
    with pytest.raises(NoPermissionError):
        identify(None, store)
    with pytest.raises(NoPermissionError):
        identify(Account(name="alice", roles=[]), store)
    with pytest.raises(AccountDeletedError):
        identify(Account(name="ghost", roles=["reader"]), store)


def test_identify_root_skips_lookup():
    acc = Account(name="root", roles=["admin"])
    assert identify(acc, FakeStore()) is acc


def test_check_perm_admin_unrestricted():
    acc = Account(name="alice", roles=["reader", "admin"])
    assert check_perm(acc, _store(), ResourceScope(type="config", verb="delete")) == []


def test_check_perm_returns_labels():
    acc = Account(name="alice", roles=["reader"])
    assert check_perm(acc, _store(), ResourceScope(type="config", verb="get")) == [PROD]
    with pytest.raises(NoPermissionError):
        check_perm(acc, _store(), ResourceScope(type="config", verb="create"))


def test_filter_kv_list():
    kvs = [
        KVDoc(key="a", labels=dict(PROD)),
        KVDoc(key="b", labels={"environment": "testing"}),
    ]
    reader = Account(name="alice", roles=["reader"])
    assert filter_kv_list(RBAC(enabled=False), reader, _store(), kvs) is kvs
    assert [kv.key for kv in filter_kv_list(ENABLED, reader, _store(), kvs)] == ["a"]
    writer = Account(name="bob", roles=["writer"])
    assert filter_kv_list(ENABLED, writer, _store(), kvs) == kvs
    unknown = Account(name="carol", roles=["nobody"])
    assert filter_kv_list(ENABLED, unknown, _store(), kvs) == []


def test_check_kv_verbs():
    reader = Account(name="alice", roles=["reader"])
    kv = KVDoc(key="a", labels=dict(PROD))
    check_get_kv(ENABLED, reader, _store(), kv)
    with pytest.raises(NoPermissionError):
        check_create_kv(ENABLED, reader, _store(), kv)
    with pytest.raises(NoPermissionError):
        check_update_kv(ENABLED, reader, _store(), kv)
    with pytest.raises(NoPermissionError):
        check_delete_kv(ENABLED, reader, _store(), kv)
    with pytest.raises(NoPermissionError):
        check_get_kv(ENABLED, reader, _store(), KVDoc(key="b", labels={"environment": "testing"}))


def test_check_kv_disabled_never_raises_and_writer_allowed():
    reader = Account(name="alice", roles=["reader"])
    kv = KVDoc(key="a", labels=dict(PROD))
    assert check_delete_kv(RBAC(enabled=False), reader, _store(), kv) is None
    writer = Account(name="bob", roles=["writer"])
    assert check_delete_kv(ENABLED, writer, _store(), kv) is None