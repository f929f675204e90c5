# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Integrity checks for HierarchyStore.

add_item and update_item keep the store consistent, but the initial bulk
load is unchecked. collect_errors reports what such a load may leave
behind: parent references to missing items, and parent cycles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import CircularReferenceError, ParentNotFoundError

if TYPE_CHECKING:
    from ..item import ItemId
    from .core import HierarchyStore

DANGLING_PARENT = "parent {!r} not found"
CIRCULAR_REFERENCE = "circular reference"


def _cycle_members(store: HierarchyStore) -> set[ItemId]:
    """Return the ids of every item lying on a parent cycle."""
    items = store._items
    # 0 = unvisited, 1 = on current chain, 2 = done
    state: dict[ItemId, int] = {}
    on_cycle: set[ItemId] = set()

    for start in items:
        if state.get(start):
            continue
        chain: list[ItemId] = []
        current = start
        while current in items and not state.get(current):
            state[current] = 1
            chain.append(current)
            current = items[current].parent
        if current in items and state.get(current) == 1:
            on_cycle.update(chain[chain.index(current):])
        for item_id in chain:
            state[item_id] = 2
    return on_cycle


def collect_errors(store: HierarchyStore) -> dict[ItemId, list[str]]:
    """Return the integrity problems of store, keyed by item id.

    Only ids with at least one problem appear, in primary index order.

    Example:
        >>> store = HierarchyStore([{'id': 1, 'parent': 99, 'label': 'orphan'}])
        >>> collect_errors(store)
        {1: ['parent 99 not found']}
    """
    on_cycle = _cycle_members(store)
    errors: dict[ItemId, list[str]] = {}
    for item_id, item in store._items.items():
        reasons: list[str] = []
        if item.parent is not None and item.parent not in store._items:
            reasons.append(DANGLING_PARENT.format(item.parent))
        if item_id in on_cycle:
            reasons.append(CIRCULAR_REFERENCE)
        if reasons:
            errors[item_id] = reasons
    return errors


def check_integrity(store: HierarchyStore) -> None:
    """Raise on the first integrity problem found in store.

    Raises:
        ParentNotFoundError: For a parent reference to a missing item.
        CircularReferenceError: For an item lying on a parent cycle.
    """
    for item_id, reasons in collect_errors(store).items():
        if reasons[0] == CIRCULAR_REFERENCE:
            raise CircularReferenceError(item_id)
        raise ParentNotFoundError(store._items[item_id].parent)
