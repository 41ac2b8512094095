"""Look-ahead window over ordered partitions.

This replaces a ``LEAD() OVER (PARTITION BY ... ORDER BY ...)``
window with a stable sort and one indexed pass.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, TypeVar

from transforms.recency_deduplication import nulls_first

RowT = TypeVar("RowT")


def pair_with_next(
    rows: Iterable[RowT],
    partition_key: Callable[[RowT], Hashable],
    order_key: Callable[[RowT], Any],
) -> list[tuple[RowT, RowT | None]]:
    """Pair each row with the next row of its partition.

    Args:
        rows: Input rows in source order.
        partition_key: Partition key; ``None`` keys form one partition.
        order_key: Ascending order inside a partition; must be totally ordered.

    Returns:
        ``(row, next_row)`` pairs ordered by partition then order key;
        ``next_row`` is ``None`` for the last row of each partition.
    """
    ordered_rows = sorted(rows, key=order_key)
    ordered_rows.sort(key=lambda row: nulls_first(partition_key(row)))
    pairs: list[tuple[RowT, RowT | None]] = []
    for index, row in enumerate(ordered_rows):
        next_row = ordered_rows[index + 1] if index + 1 < len(ordered_rows) else None
        if next_row is not None and partition_key(next_row) != partition_key(row):
            next_row = None
        pairs.append((row, next_row))
    return pairs
