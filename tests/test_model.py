import json
from datetime import datetime, timezone

from kie.model import KVDoc, KVResponse, PollingDetail


def test_kv_from_json():
    kv2 = KVDoc.from_dict(json.loads(' \n {"value": "1","labels":{"test":"env"}}\n '))
    assert kv2.labels["test"] == "env"
    assert kv2.value == "1"


def test_kv_to_dict_omits_empty_fields():
    kv = KVDoc(value="test", labels={"test": "env"})
    assert kv.to_dict() == {"key": "", "value": "test", "labels": {"test": "env"}}


def test_kv_checker_serialised_as_check():
    kv = KVDoc(key="k", checker="print(1)")
    assert kv.to_dict()["check"] == "print(1)"
    assert KVDoc.from_dict({"check": "x"}).checker == "x"


def test_kv_round_trip():
    kv = KVDoc(
        id="1",
        label_format="env=test",
        key="timeout",
        value="5s",
        value_type="text",
        priority=2,
        create_revision=3,
        update_revision=4,
        project="default",
        status="enabled",
        create_time=10,
        update_time=11,
        labels={"env": "test"},
        domain="default",
    )
    assert KVDoc.from_dict(json.loads(json.dumps(kv.to_dict()))) == kv


def test_kv_from_empty_dict_has_defaults():
    kv = KVDoc.from_dict({})
    assert kv == KVDoc()
    assert kv.labels == {}


def test_kv_response_to_dict():
    resp = KVResponse(total=1, data=[KVDoc(key="a", value="b")])
    assert resp.to_dict() == {"total": 1, "data": [{"key": "a", "value": "b"}]}


def test_empty_kv_response_to_dict():
    assert KVResponse().to_dict() == {"total": 0, "data": []}


def test_polling_detail_round_trip():
    detail = PollingDetail(
        id="p1",
        session_id="s1",
        session_group="g1",
        domain="default",
        project="default",
        polling_data={"labels": {"app": "a"}},
        revision="7",
        ip="10.0.0.1",
        user_agent="agent",
        url_path="/v1/kie/kv",
        response_body=[KVDoc(key="k", value="v")],
        response_code=200,
        timestamp=datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    data = json.loads(json.dumps(detail.to_dict()))
    assert data["kv"] == [{"key": "k", "value": "v"}]
    assert PollingDetail.from_dict(data) == detail


def test_polling_detail_accepts_z_timestamp():
    detail = PollingDetail.from_dict({"timestamp": "2021-01-02T03:04:05Z"})
    assert detail.timestamp == datetime(2021, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_polling_detail_empty_to_dict():
    assert PollingDetail().to_dict() == {}