"""Unit tests for the catalog error hierarchy."""

import pytest

from tenantcat.domain.errors import CatalogError, NameValidationError
from tenantcat.domain.names import NameKind
from tenantcat.domain.value_objects import Shard
from tenantcat.interfaces.shard_registry import (
    MappingConflict,
    MappingNotFound,
    ShardNotRegistered,
    ShardRegistryError,
)
from tenantcat.service_layer.errors import CatalogBootstrapError, StoreUnavailable

# pylint: disable=magic-value-comparison


@pytest.mark.parametrize(
    "error",
    [
        NameValidationError("x y ", NameKind.LEGAL_NAME, NameKind.LEGAL_NAME.allowed),
        MappingConflict(7, existing=Shard("a", "b"), requested=Shard("c", "d")),
        ShardNotRegistered(Shard("a", "b")),
        MappingNotFound(7),
        CatalogBootstrapError("sqlite:///missing.db", "database file does not exist"),
        StoreUnavailable("add_mapping", 5),
    ],
)
def test_every_catalog_fault_is_a_catalog_error(error):
    assert isinstance(error, CatalogError)


def test_mapping_conflict_names_both_shards():
    err = MappingConflict(42, existing=Shard("serverA", "dbA"), requested=Shard("serverB", "dbB"))

    assert isinstance(err, ShardRegistryError)
    assert err.tenant_key == 42
    assert err.existing == Shard("serverA", "dbA")
    assert err.requested == Shard("serverB", "dbB")
    assert "serverA/dbA" in str(err)
    assert "serverB/dbB" in str(err)


def test_shard_not_registered_message():
    err = ShardNotRegistered(Shard("serverA", "dbA"))
    assert err.shard == Shard("serverA", "dbA")
    assert str(err) == "Shard 'serverA/dbA' is not registered in the catalog."


def test_mapping_not_found_message():
    assert str(MappingNotFound(-5)) == "No mapping exists for tenant key -5."


def test_bootstrap_error_keeps_url_and_reason():
    err = CatalogBootstrapError("postgresql://u:***@h/db", "connection refused")
    assert err.url == "postgresql://u:***@h/db"
    assert err.reason == "connection refused"
    assert str(err) == "Cannot open catalog at postgresql://u:***@h/db: connection refused"


def test_store_unavailable_message():
    err = StoreUnavailable("upsert_tenant_name", 5)
    assert err.operation == "upsert_tenant_name"
    assert err.attempts == 5
    assert "after 5 attempts" in str(err)
