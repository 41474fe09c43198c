"""Concurrency contracts for the ShardRegistry port.

These assert the SQL adapter relies on the store's primary key to arbitrate
racing add_mapping() calls for one tenant key.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Literal

import pytest

from tenantcat.adapters.catalog.sqlalchemy_adapters import SqlAlchemyShardRegistry
from tenantcat.domain.value_objects import Shard
from tenantcat.interfaces.shard_registry import MappingConflict

# pylint: disable=redefined-outer-name

N_WORKERS = 8
TENANT_KEY = 1_234_567


@pytest.fixture(params=["sql_file", "postgres"])
def make_registry_ctx(request: pytest.FixtureRequest):
    """Factory for context managers yielding a registry on its own transaction."""
    fixture = {"sql_file": "sqlite_engine_file", "postgres": "postgres_engine"}[request.param]
    engine = request.getfixturevalue(fixture)

    @contextmanager
    def _ctx():
        # new connection + BEGIN; COMMIT on exit (ROLLBACK on error)
        with engine.begin() as conn:
            yield SqlAlchemyShardRegistry(conn)

    return _ctx


def _run_workers(make_registry_ctx, shards: list[Shard]):
    barrier = threading.Barrier(len(shards))
    results: list[tuple[Literal["ok", "err"], Shard | Exception]] = []
    lock = threading.Lock()

    def worker(shard: Shard):
        try:  # pylint: disable=too-many-try-statements
            with make_registry_ctx() as registry:
                barrier.wait(timeout=5)
                registry.add_mapping(TENANT_KEY, shard)
            with lock:
                results.append(("ok", shard))
        except (MappingConflict, threading.BrokenBarrierError) as e:
            with lock:
                results.append(("err", e))

    threads = [threading.Thread(target=worker, args=(shard,)) for shard in shards]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)
    return results


def test_concurrent_mapping_to_different_shards(make_registry_ctx):
    """Exactly one worker wins; the other seven see MappingConflict."""
    shards = [Shard("server", f"db{i}") for i in range(N_WORKERS)]
    with make_registry_ctx() as registry:
        for shard in shards:
            registry.add_shard(shard)

    results = _run_workers(make_registry_ctx, shards)

    oks = [r for tag, r in results if tag == "ok"]
    errs = [r for tag, r in results if tag == "err"]
    assert len(oks) == 1, f"expected exactly one winner, got {results}"
    assert len(errs) == N_WORKERS - 1
    assert all(isinstance(e, MappingConflict) for e in errs), errs

    with make_registry_ctx() as registry:
        assert registry.lookup_shard(TENANT_KEY) == oks[0]


def test_concurrent_mapping_to_the_same_shard(make_registry_ctx):
    """Every worker succeeds when they all agree on the shard."""
    shard = Shard("server", "db0")
    with make_registry_ctx() as registry:
        registry.add_shard(shard)

    results = _run_workers(make_registry_ctx, [shard] * N_WORKERS)

    assert [tag for tag, _ in results] == ["ok"] * N_WORKERS, results
    with make_registry_ctx() as registry:
        assert registry.list_mappings()[0].shard == shard
