"""Most-recent-wins deduplication rule.

Rows are stably sorted by partition key, then by a caller-supplied
order key, and a single linear pass keeps the first row of each
partition. Ties keep input order, so results are deterministic.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, TypeVar

RowT = TypeVar("RowT")

_NO_PARTITION = object()


def keep_first_per_key(
    rows: Iterable[RowT],
    partition_key: Callable[[RowT], Hashable],
    order_key: Callable[[RowT], Any],
    descending: bool = True,
) -> list[RowT]:
    """Keep one row per partition, chosen by ``order_key``.

    Args:
        rows: Input rows in source order.
        partition_key: Grouping key; ``None`` keys form one partition.
        order_key: Sort key inside a partition; must be totally ordered.
        descending: Whether the largest order key wins.

    Returns:
        One row per partition, ordered by partition key.
    """
    ordered_rows = sorted(rows, key=order_key, reverse=descending)
    ordered_rows.sort(key=lambda row: nulls_first(partition_key(row)))
    survivors: list[RowT] = []
    previous_key: object = _NO_PARTITION
    for row in ordered_rows:
        current_key = partition_key(row)
        if current_key == previous_key:
            continue
        survivors.append(row)
        previous_key = current_key
    return survivors


def nulls_first(value: Any) -> tuple[bool, Any]:
    """Sort key placing ``None`` before every other value.

    Reversed sorts therefore place ``None`` last, matching SQL
    ``ORDER BY ... DESC`` semantics.
    """
    return (value is not None, value if value is not None else 0)
