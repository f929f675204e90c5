# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for HierarchyStore.

Input records may be given as:
- HierarchyItem instances
- flat mappings: {'id': 1, 'parent': None, 'label': 'A', **extra}
- tuples: (id, parent, label) or (id, parent, label, extra)

Every record is turned into a HierarchyItem owned by the store.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, TYPE_CHECKING

from ..item import HierarchyItem

if TYPE_CHECKING:
    from .core import HierarchyStore


def coerce_item(source: Any) -> HierarchyItem:
    """Return a new HierarchyItem built from source.

    A HierarchyItem source is copied, so the result never aliases the
    caller's object.

    Raises:
        TypeError: If source is not a supported record type.
    """
    if isinstance(source, HierarchyItem):
        return source.copy()
    if isinstance(source, Mapping):
        return HierarchyItem.from_dict(source)
    if isinstance(source, tuple):
        if len(source) == 3:
            return HierarchyItem(*source)
        if len(source) == 4:
            item_id, parent, label, extra = source
            return HierarchyItem(item_id, parent, label, extra)
        raise TypeError(
            f"item tuple must have 3 or 4 elements, not {len(source)}"
        )
    raise TypeError(
        f"item must be HierarchyItem, mapping or tuple, not {type(source).__name__}"
    )


def load_items(store: HierarchyStore, items: Iterable[Any]) -> None:
    """Populate both indices of store from items, without validation.

    The primary index keeps the first position of an id; a repeated id
    overwrites the stored record in place, and only the record that wins
    is listed as a child. Each stored record is appended to its parent's
    child list in input order whether or not the parent exists.
    """
    loaded = [coerce_item(source) for source in items]
    for item in loaded:
        store._items[item.id] = item
    for item in loaded:
        if item.parent is not None and store._items[item.id] is item:
            store._children.setdefault(item.parent, []).append(item.id)
