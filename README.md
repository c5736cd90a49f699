# kie

The core of a key-value configuration service. Configuration items are
key-value pairs tagged with labels and kept per domain (tenant) and project.
This package holds the parts that do not depend on a particular storage
backend or web framework.

## Modules

- `kie.model` – dataclasses for stored documents and for requests and
  responses: `KVDoc`, `KVResponse`, `PollingDetail`, `ListKVRequest`,
  `GetKVRequest`, `UpdateKVRequest`, `UploadKVRequest` and others.
  `KVDoc` and `PollingDetail` convert to and from their JSON dict form with
  `to_dict()` / `from_dict()`; empty optional fields are left out.
- `kie.validator` – `validate(obj)` checks a `KVDoc`, `ListKVRequest`,
  `GetKVRequest`, `UpdateKVRequest` or `UploadKVRequest` against the rules
  for keys, values, labels, value types and statuses, and raises
  `ValidationError` (its `errors` attribute lists every violation).
- `kie.stringutil` – `format_map`, the canonical text form of a label set.
- `kie.util` – `is_equivalent_label`, `is_contain_label`, and `svc_err`,
  which turns any exception into a `ServiceError` (code 500 unless it
  already is one).
- `kie.key` – the storage key layout: `kv`, `kv_list`, `counter`, `his`,
  `his_list`, `track`, `track_list`, `task_key`, `tombstone_key`.
- `kie.kv_sort` – `reverse_by_priority_and_update_rev` sorts a list of
  `KVDoc` in place, higher priority first, then newer update revision.
- `kie.long_polling` – `LongPollingCache`, a thread-safe map from topic to
  `DBResult`; `read` returns `(revision, KVResponse)` or `(0, None)` and
  raises a cached error. `cached_kv()` returns the process-wide instance.
- `kie.kv_cache` – `KvCache`, entries by id with expiry (ten minutes by
  default) plus the set of entry ids under each domain, project and label
  set. `cache_put` and `cache_delete` take JSON-encoded entries.
- `kie.config` – the `Config`, `DB`, `TLS`, `RBAC` and `Sync` settings;
  `Config.update_from_yaml` applies a YAML document, `init()` loads the file
  named by `configurations.config_file`, and `get_db`, `get_rbac`,
  `get_sync` return the sections of the process-wide configuration.
- `kie.command` – `parse_config(args)` reads `--config`, `--name`,
  `--peer-addr`, `--listen-peer-addr` and `--advertise-addr` (program name
  first in `args`) into the process-wide configuration. The `NODE_NAME`,
  `PEER_ADDR`, `LISTEN_PEER_ADDR` and `ADVERTISE_ADDR` environment variables
  give defaults; bad options raise `ValueError`.
- `kie.datasource` – a registry of storage factories (`register_plugin`,
  `init`, `get_broker`), the storage errors (`KeyNotExistsError`,
  `RecordNotExistsError`, `RevisionNotExistError`, `KVAlreadyExistsError`,
  `TooManyError`), and `clear_part` / `tombstone_id`.
- `kie.auth.decision` – role-based decisions: `allow`, `get_label`,
  `get_label_from_single_perm`, `filter_label`, `label_matched`, and
  `filter_kvs`, with the `Role`, `Permission`, `Resource` and
  `ResourceScope` records.
- `kie.auth.service` – `identify`, `check_perm`, `check_enable`,
  `filter_kv_list` and `check_get_kv` / `check_create_kv` /
  `check_update_kv` / `check_delete_kv`, given the caller's `Account`, the
  `RBAC` settings and a store that looks up roles and accounts.
- `kie.common` – query parameter names, headers, messages, and
  `parse_wait`, which accepts durations such as `5s` or `100ms` up to five
  minutes.
- `kie.concurrency` – `Semaphore`, a bounded ticket count (at most 65535)
  usable as a context manager.
- `kie.iputil` – `client_ip(headers, remote_addr)` takes the client address
  from `X-Forwarded-For`, then `X-Real-Ip`, then the peer address.

## Labels

A label set has a stable, sorted text form, used for cache keys and for the
`label_format` of an entry:

```python
from kie.stringutil import format_map

format_map({"version": "1", "service": "a"})   # "service=a::version=1"
format_map({})                                  # "none"
```

A missing label set and an empty one compare equal:

```python
from kie.util import is_equivalent_label, is_contain_label

is_equivalent_label(None, {})                                  # True
is_contain_label({"app": "a", "env": "dev"}, {"env": "dev"})   # True
```

## Validation

```python
from kie.model import KVDoc
from kie.validator import validate, ValidationError

validate(KVDoc(project="a", domain="a", key="zZ12.-_:", value="a"))

try:
    validate(KVDoc(project="a", domain="a", key="a#", value="a"))
except ValidationError as exc:
    print("rejected:", exc.errors)
```

## Storage keys

```python
from kie import key

key.kv("default", "proj", "id1")          # "kvs/default/proj/id1"
key.kv_list("default", "")                # "kvs/default/"
key.his("default", "proj", "id1", 7)      # "kv-history/default/proj/id1/7"
```

## Access control

`kie.auth.decision.allow` returns the label sets a list of roles may act on
for a resource type and verb (an empty list means no label restriction) and
raises `NoPermissionError` otherwise. `filter_kvs` keeps the entries whose
labels satisfy one of those sets. `kie.auth.service` applies these checks to
get, create, update and delete of entries; the `admin` role passes every
check, and checks are skipped when `RBAC.enabled` is false, or when
`allow_miss_token` is set and no account is given.

## What this package does not do

There is no HTTP server, request handling or long-polling endpoint here, and
no storage backend: `kie.datasource` only keeps a registry of factories that
callers register themselves. Tokens are not parsed; callers pass an
`Account` to the checks in `kie.auth.service`. `KvCache` holds entries in
memory but does not fetch or watch them from a store. TLS settings are read
into `kie.config.TLS` but no connections are made with them.

## Tests

The tests use pytest, installed with the `test` extra:

```
pip install -e .[test]
pytest
```