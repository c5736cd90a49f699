from kie import key


def test_kv_value():
    assert key.kv("d", "p", "id1") == "kvs/d/p/id1"


def test_his_value():
    assert key.his("d", "p", "id1", 7) == "kv-history/d/p/id1/7"


def test_task_key_value():
    assert key.task_key("d", "p", "t1", 123) == "/syncer/task/d/p/123/t1"


def test_kv_list_is_prefix_of_kv():
    assert key.kv("d", "p", "id1").startswith(key.kv_list("d", "p"))


def test_domain_list_is_prefix_of_project_list():
    domain_prefix = key.kv_list("d", "")
    assert key.kv_list("d", "p").startswith(domain_prefix)
    assert domain_prefix.endswith("/d/")


def test_his_list_is_prefix_of_his():
    assert key.his("d", "p", "id1", 3).startswith(key.his_list("d", "p", "id1"))
    assert key.his_list("d", "p", "id1").endswith("/")


def test_track_list_is_prefix_of_track():
    assert key.track("d", "p", "5", "s1").startswith(key.track_list("d", "p"))
    assert key.track("d", "p", "5", "s1").endswith("/5/s1")


def test_counter_parts():
    assert key.counter("revision_counter", "d").split("/") == [
        "counter",
        "d",
        "revision_counter",
    ]


def test_tombstone_key_parts():
    result = key.tombstone_key("d", "p", "config", "k")
    assert result.startswith("/tombstone/")
    assert result.endswith("/d/p/config/k")