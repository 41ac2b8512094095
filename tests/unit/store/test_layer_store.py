"""Unit tests for atomic layer replacement."""

from __future__ import annotations

import pyarrow as pa
import pytest

from core.errors import ConformStoreError
from core.snapshots import CleansedSnapshot, RawSnapshot
from core.types import ProductCategory, RawCustomerLocation
from store import layer_store
from store.layer_store import LayerStore


def _raw_snapshot(country: str) -> RawSnapshot:
    return RawSnapshot(
        locations=(RawCustomerLocation(cid="AW-00011000", cntry=country),),
        categories=(ProductCategory("CO_RF", "Components", "Road Frames", "Yes"),),
    )


def test_replace_then_read_layer(config) -> None:
    """A replaced layer should read back as an equal snapshot."""
    store = LayerStore(config)
    snapshot = _raw_snapshot("DE")

    store.replace_layer("raw", snapshot, "run-1")

    assert store.read_layer("raw") == snapshot and store.has_layer("raw")


def test_manifest_records_counts_and_digests(config) -> None:
    """Manifest should list every table with row count and digest."""
    store = LayerStore(config)

    manifest = store.replace_layer("raw", _raw_snapshot("DE"), "run-1")

    assert manifest == store.read_manifest("raw")
    assert manifest["run_id"] == "run-1" and manifest["tables"]["erp_loc_a101"]["row_count"] == 1
    assert len(manifest["tables"]) == 6 and len(manifest["tables"]["erp_loc_a101"]["sha256"]) == 64


def test_replace_layer_discards_previous_rows(config) -> None:
    """Replacement should not append to the previous snapshot."""
    store = LayerStore(config)
    store.replace_layer("raw", _raw_snapshot("DE"), "run-1")

    store.replace_layer("raw", _raw_snapshot("US"), "run-2")

    assert [row.cntry for row in store.read_all("raw", "erp_loc_a101")] == ["US"]


def test_failed_replace_keeps_previous_snapshot(config, monkeypatch: pytest.MonkeyPatch) -> None:
    """A write failure midway should leave the prior layer intact."""
    store = LayerStore(config)
    previous = _raw_snapshot("DE")
    store.replace_layer("raw", previous, "run-1")

    def _failing_encode(rows, row_type) -> bytes:
        raise OSError("disk full")

    monkeypatch.setattr(layer_store, "encode_table", _failing_encode)

    with pytest.raises(ConformStoreError):
        store.replace_layer("raw", _raw_snapshot("US"), "run-2")

    layer_entries = sorted(path.name for path in (config.data_root / "layers").iterdir())
    assert store.read_layer("raw") == previous and layer_entries == ["raw"]


@pytest.mark.parametrize(
    "encode_error",
    [OverflowError("int too big to convert"), pa.ArrowInvalid("value out of range")],
)
def test_encode_failure_keeps_previous_layer(config, monkeypatch, encode_error: Exception) -> None:
    """Encoding errors should surface as store errors and leave no staging directory."""
    store = LayerStore(config)
    previous = _raw_snapshot("DE")
    store.replace_layer("raw", previous, "run-1")

    def _failing_encode(rows, row_type) -> bytes:
        raise encode_error

    monkeypatch.setattr(layer_store, "encode_table", _failing_encode)

    with pytest.raises(ConformStoreError):
        store.replace_layer("raw", _raw_snapshot("US"), "run-2")

    layer_entries = sorted(path.name for path in (config.data_root / "layers").iterdir())
    assert store.read_layer("raw") == previous and layer_entries == ["raw"]


def test_wrong_snapshot_type_is_rejected(config) -> None:
    """A layer should only accept its own snapshot type."""
    with pytest.raises(ConformStoreError):
        LayerStore(config).replace_layer("raw", CleansedSnapshot(), "run-1")


def test_unknown_layer_and_missing_layer_raise(config) -> None:
    """Unknown layer names and unwritten layers should raise store errors."""
    store = LayerStore(config)

    with pytest.raises(ConformStoreError):
        store.read_layer("gold")
    with pytest.raises(ConformStoreError):
        store.read_layer("cleansed")


def test_replace_all_rewrites_one_table(config) -> None:
    """Replacing one table should update rows and its manifest entry only."""
    store = LayerStore(config)
    store.replace_layer("raw", _raw_snapshot("DE"), "run-1")
    rows = [RawCustomerLocation("AW-1", "US"), RawCustomerLocation("AW-2", None)]

    count = store.replace_all("raw", "erp_loc_a101", rows, "run-2")
    manifest = store.read_manifest("raw")

    assert count == 2 and store.read_all("raw", "erp_loc_a101") == rows
    assert manifest["tables"]["erp_loc_a101"]["row_count"] == 2
    assert manifest["tables"]["erp_px_cat_g1v2"]["row_count"] == 1


def test_replace_all_rejects_foreign_table(config) -> None:
    """Tables outside the layer should be rejected."""
    with pytest.raises(ConformStoreError):
        LayerStore(config).replace_all("raw", "dim_customers", [], "run-1")


def test_read_all_returns_typed_rows(config) -> None:
    """Stored rows should decode as the layer row type."""
    store = LayerStore(config)
    store.replace_layer(
        "cleansed",
        CleansedSnapshot(categories=(ProductCategory("AC_HE", "Accessories", "Helmets", "Yes"),)),
        "run-1",
    )

    assert store.read_all("cleansed", "erp_px_cat_g1v2")[0].cat == "Accessories"
