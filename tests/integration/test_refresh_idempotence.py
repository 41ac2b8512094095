"""Integration tests for repeatable warehouse refreshes."""

from __future__ import annotations

from store.layer_store import LayerStore
from store.warehouse_sdk import WarehouseClient


def _table_digests(store: LayerStore, layer: str) -> dict[str, str]:
    manifest = store.read_manifest(layer)
    return {name: entry["sha256"] for name, entry in manifest["tables"].items()}


def test_repeated_refresh_produces_identical_layers(config) -> None:
    """Two refreshes over unchanged sources should write identical tables."""
    client = WarehouseClient(config)
    store = LayerStore(config)

    first_run = client.run()
    first = {layer: _table_digests(store, layer) for layer in ("raw", "cleansed", "dimensional")}
    second_run = client.run()
    second = {layer: _table_digests(store, layer) for layer in ("raw", "cleansed", "dimensional")}

    assert first_run.run_id != second_run.run_id and first == second


def test_cleanse_of_stored_raw_is_repeatable(config) -> None:
    """Re-cleansing the same raw layer should not change the cleansed layer."""
    client = WarehouseClient(config)
    client.load_raw()

    first = client.cleanse()
    second = client.cleanse()

    assert first == second == client.read_layer("cleansed")


def test_refresh_replaces_instead_of_appending(config) -> None:
    """Row counts should stay stable across refreshes."""
    client = WarehouseClient(config)
    client.run()
    client.run()

    assert client.read_layer("dimensional").row_counts() == {
        "dim_customers": 5,
        "dim_products": 3,
        "fact_sales": 5,
    }
