"""Layer store for raw, cleansed, and dimensional snapshots.

Each layer is a directory of Parquet tables plus a manifest. Whole
layers are replaced by building a staging directory and swapping it
into place, so a failed write leaves the previous snapshot intact.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any, Sequence

import pyarrow as pa

from core.config import ConformConfig
from core.constants import (
    CLEANSED_LAYER,
    DIMENSIONAL_LAYER,
    LAYER_MANIFEST_FILE_NAME,
    LAYERS_DIR_NAME,
    RAW_LAYER,
    TABLE_FILE_SUFFIX,
)
from core.errors import ConformStoreError
from core.logging_config import get_logger
from core.run_context import utc_now
from core.snapshots import CleansedSnapshot, DimensionalSnapshot, LayerSnapshot, RawSnapshot
from store.table_codec import decode_table, digest_bytes, encode_table

_LOGGER = get_logger(__name__)

LAYER_SNAPSHOT_TYPES: dict[str, type[LayerSnapshot]] = {
    RAW_LAYER: RawSnapshot,
    CLEANSED_LAYER: CleansedSnapshot,
    DIMENSIONAL_LAYER: DimensionalSnapshot,
}


class LayerStore:
    """Parquet-backed store for the three warehouse layers.

    This class owns the layer directories under ``<data_root>/layers``
    and the per-layer manifests recording row counts and digests.
    """

    def __init__(self, config: ConformConfig) -> None:
        """Initialize layer store from config.

        Args:
            config: Runtime configuration.
        """
        self._layers_root = config.data_root / LAYERS_DIR_NAME

    def read_layer(self, layer: str) -> Any:
        """Load every table of a layer as a typed snapshot.

        Args:
            layer: Layer name.

        Returns:
            Snapshot instance for the layer.

        Raises:
            ConformStoreError: If the layer was never written or is unreadable.
        """
        snapshot_type = _snapshot_type(layer)
        layer_dir = self._existing_layer_dir(layer)
        tables = {
            table_name: _read_table_file(layer_dir, table_name, row_type)
            for table_name, row_type in snapshot_type.table_types().items()
        }
        return snapshot_type.from_tables(tables)

    def replace_layer(self, layer: str, snapshot: LayerSnapshot, run_id: str) -> dict[str, Any]:
        """Atomically replace a whole layer with a new snapshot.

        Args:
            layer: Layer name.
            snapshot: Fully computed snapshot for the layer.
            run_id: Run writing the snapshot.

        Returns:
            Written manifest payload.

        Raises:
            ConformStoreError: If staging or swapping fails; the prior
                layer content is left in place.
        """
        snapshot_type = _snapshot_type(layer)
        if not isinstance(snapshot, snapshot_type):
            raise ConformStoreError(
                f"Layer '{layer}' expects {snapshot_type.__name__}, got {type(snapshot).__name__}."
            )
        layer_dir = self._layers_root / layer
        staging_dir = self._layers_root / f"{layer}.staging-{run_id}"
        try:
            manifest = _write_staging_layer(staging_dir, layer, snapshot, run_id)
            _swap_directories(staging_dir, layer_dir, run_id)
        except (OSError, OverflowError, pa.ArrowException) as error:
            shutil.rmtree(staging_dir, ignore_errors=True)
            raise ConformStoreError(
                f"Failed to replace layer '{layer}' at {layer_dir}: {error}. "
                "Previous snapshot was kept; check disk space and that values fit their column types."
            ) from error
        _LOGGER.info(
            "layer_replaced",
            layer=layer,
            run_id=run_id,
            row_counts=snapshot.row_counts(),
        )
        return manifest

    def read_all(self, layer: str, table_name: str) -> list[Any]:
        """Read one table of a layer in stored order.

        Raises:
            ConformStoreError: If the layer or table is missing.
        """
        row_type = _row_type(layer, table_name)
        return _read_table_file(self._existing_layer_dir(layer), table_name, row_type)

    def replace_all(
        self,
        layer: str,
        table_name: str,
        rows: Sequence[Any],
        run_id: str,
    ) -> int:
        """Replace one table of a layer and return its row count.

        The table file is written beside its target and renamed over
        it, then the manifest entry is updated.

        Raises:
            ConformStoreError: If the write fails.
        """
        row_type = _row_type(layer, table_name)
        layer_dir = self._layers_root / layer
        table_path = layer_dir / f"{table_name}{TABLE_FILE_SUFFIX}"
        temp_path = table_path.with_name(f"{table_path.name}.tmp-{run_id}")
        payload = encode_table(rows, row_type)
        try:
            layer_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(payload)
            os.replace(temp_path, table_path)
            manifest = _read_manifest_or_empty(layer_dir, layer)
            manifest["run_id"] = run_id
            manifest["written_at"] = utc_now().isoformat()
            manifest["tables"][table_name] = _table_entry(table_path.name, len(rows), payload)
            _write_manifest(layer_dir, manifest)
        except OSError as error:
            temp_path.unlink(missing_ok=True)
            raise ConformStoreError(
                f"Failed to replace table {layer}.{table_name} at {table_path}: {error}. "
                "Check disk space and permissions."
            ) from error
        return len(rows)

    def read_manifest(self, layer: str) -> dict[str, Any]:
        """Return the manifest of a written layer.

        Raises:
            ConformStoreError: If the layer or its manifest is missing or invalid.
        """
        manifest_path = self._existing_layer_dir(layer) / LAYER_MANIFEST_FILE_NAME
        return _read_manifest_file(manifest_path)

    def has_layer(self, layer: str) -> bool:
        """Return whether a layer has been written."""
        return (self._layers_root / _checked_layer(layer)).is_dir()

    def _existing_layer_dir(self, layer: str) -> Path:
        layer_dir = self._layers_root / _checked_layer(layer)
        if not layer_dir.is_dir():
            raise ConformStoreError(
                f"Layer '{layer}' has not been written under {self._layers_root}. "
                "Run the stage that produces it first."
            )
        return layer_dir


def _checked_layer(layer: str) -> str:
    if layer not in LAYER_SNAPSHOT_TYPES:
        supported = ", ".join(LAYER_SNAPSHOT_TYPES)
        raise ConformStoreError(f"Unsupported layer '{layer}'. Supported layers: {supported}.")
    return layer


def _snapshot_type(layer: str) -> type[LayerSnapshot]:
    return LAYER_SNAPSHOT_TYPES[_checked_layer(layer)]


def _row_type(layer: str, table_name: str) -> type:
    table_types = _snapshot_type(layer).table_types()
    if table_name not in table_types:
        raise ConformStoreError(
            f"Table '{table_name}' does not belong to layer '{layer}'. "
            f"Known tables: {', '.join(table_types)}."
        )
    return table_types[table_name]


def _write_staging_layer(
    staging_dir: Path,
    layer: str,
    snapshot: LayerSnapshot,
    run_id: str,
) -> dict[str, Any]:
    """Write all tables and the manifest into a fresh staging directory."""
    shutil.rmtree(staging_dir, ignore_errors=True)
    staging_dir.mkdir(parents=True)
    row_types = snapshot.table_types()
    tables: dict[str, dict[str, Any]] = {}
    for table_name, rows in snapshot.tables().items():
        payload = encode_table(rows, row_types[table_name])
        file_name = f"{table_name}{TABLE_FILE_SUFFIX}"
        (staging_dir / file_name).write_bytes(payload)
        tables[table_name] = _table_entry(file_name, len(rows), payload)
    manifest = {
        "layer": layer,
        "run_id": run_id,
        "written_at": utc_now().isoformat(),
        "tables": tables,
    }
    _write_manifest(staging_dir, manifest)
    return manifest


def _swap_directories(staging_dir: Path, layer_dir: Path, run_id: str) -> None:
    """Move the staged layer into place, discarding the previous one last."""
    previous_dir = layer_dir.with_name(f"{layer_dir.name}.previous-{run_id}")
    had_previous = layer_dir.exists()
    if had_previous:
        os.replace(layer_dir, previous_dir)
    try:
        os.replace(staging_dir, layer_dir)
    except OSError:
        if had_previous:
            os.replace(previous_dir, layer_dir)
        raise
    if had_previous:
        shutil.rmtree(previous_dir, ignore_errors=True)


def _table_entry(file_name: str, row_count: int, payload: bytes) -> dict[str, Any]:
    return {"file": file_name, "row_count": row_count, "sha256": digest_bytes(payload)}


def _read_table_file(layer_dir: Path, table_name: str, row_type: type) -> list[Any]:
    table_path = layer_dir / f"{table_name}{TABLE_FILE_SUFFIX}"
    if not table_path.exists():
        raise ConformStoreError(
            f"Missing table file {table_path}. Re-run the stage that writes layer '{layer_dir.name}'."
        )
    try:
        payload = table_path.read_bytes()
    except OSError as error:
        raise ConformStoreError(f"Failed to read table file {table_path}: {error}.") from error
    return decode_table(payload, row_type)


def _write_manifest(layer_dir: Path, manifest: dict[str, Any]) -> None:
    manifest_path = layer_dir / LAYER_MANIFEST_FILE_NAME
    manifest_path.write_text(json.dumps(manifest, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def _read_manifest_or_empty(layer_dir: Path, layer: str) -> dict[str, Any]:
    manifest_path = layer_dir / LAYER_MANIFEST_FILE_NAME
    if not manifest_path.exists():
        return {"layer": layer, "tables": {}}
    return _read_manifest_file(manifest_path)


def _read_manifest_file(manifest_path: Path) -> dict[str, Any]:
    """Read a layer manifest file.

    Raises:
        ConformStoreError: If the manifest is missing or invalid.
    """
    if not manifest_path.exists():
        raise ConformStoreError(
            f"Layer manifest not found at {manifest_path}. Re-run the stage that writes this layer."
        )
    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise ConformStoreError(
            f"Failed to parse layer manifest at {manifest_path}: {error.msg}. "
            "Re-run the stage that writes this layer."
        ) from error
    if not isinstance(payload, dict):
        raise ConformStoreError(
            f"Failed to parse layer manifest at {manifest_path}: expected JSON object at top level."
        )
    return payload
