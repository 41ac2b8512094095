"""Surrogate key assignment."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterable, Mapping, TypeVar

RowT = TypeVar("RowT")


def assign_surrogate_keys(
    rows: Iterable[RowT],
    order_key: Callable[[RowT], Any],
) -> list[tuple[int, RowT]]:
    """Number rows from 1 in ``order_key`` order with no gaps.

    Args:
        rows: Rows to key; ties keep input order.
        order_key: Total order over rows; must never return ``None``.

    Returns:
        ``(surrogate_key, row)`` pairs in key order.
    """
    ordered_rows = sorted(rows, key=order_key)
    return [(index, row) for index, row in enumerate(ordered_rows, start=1)]


def first_match_index(
    rows: Iterable[RowT],
    join_key: Callable[[RowT], Hashable],
) -> Mapping[Hashable, RowT]:
    """Index rows by join key, keeping the first row per key.

    ``None`` keys are skipped because they never satisfy an equi-join.
    """
    index: dict[Hashable, RowT] = {}
    for row in rows:
        key = join_key(row)
        if key is not None:
            index.setdefault(key, row)
    return index
