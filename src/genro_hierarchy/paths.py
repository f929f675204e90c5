# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Path materialization for tree displays.

Tree grids position a row by the list of labels leading from its root to
the row itself. These helpers build that list from a HierarchyStore.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .item import ItemId
    from .store import HierarchyStore


def id_path(store: HierarchyStore, item_id: ItemId) -> list[ItemId]:
    """Return the ids from the root down to item_id.

    Empty if item_id is unknown. A dangling parent reference truncates the
    path at the last ancestor that can be resolved.
    """
    return [item.id for item in reversed(store.get_all_parents(item_id))]


def label_path(store: HierarchyStore, item_id: ItemId) -> list[str]:
    """Return the labels from the root down to item_id.

    Example:
        >>> label_path(store, 7)
        ['Item 1', 'Item 2', 'Item 4', 'Item 7']
    """
    return [item.label for item in reversed(store.get_all_parents(item_id))]


def tree_rows(store: HierarchyStore) -> list[dict[str, Any]]:
    """Return one flat record per item, with its label path under 'path'.

    Rows follow get_all() order.
    """
    rows = []
    for item in store.get_all():
        row = item.as_dict()
        row['path'] = label_path(store, item.id)
        rows.append(row)
    return rows
