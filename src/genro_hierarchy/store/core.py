# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HierarchyStore - A forest of labeled items linked by parent references.

This module provides the HierarchyStore class, the core container of the
genro-hierarchy library. Items are kept flat and organized into one or more
rooted trees through their ``parent`` field.

Key Features:
    - **Two coupled indices**: id -> item, and parent id -> ordered child ids
    - **Hierarchical queries**: direct children, breadth-first descendants,
      ancestor chain
    - **Validated mutations**: add and update reject duplicate ids, missing
      parents and cycles before touching any index
    - **Cascading delete**: removing an item removes its whole subtree
    - **Owned records**: the store keeps its own copy of every item

Identifiers are str or int and are never coerced: '1' and 1 are two
different items.

Complexity:
    get_all_children, remove_item and the cycle check of add_item and
    update_item walk the subtree of the item involved, so they cost
    O(subtree size). Point lookups are O(1).

Example:
    Basic usage::

        store = HierarchyStore([
            {'id': 1, 'parent': None, 'label': 'Root'},
            {'id': 2, 'parent': 1, 'label': 'Child'},
        ])
        store.add_item(HierarchyItem(3, 2, 'Grandchild'))

        [i.id for i in store.get_all_parents(3)]  # [3, 2, 1]
        store.remove_item(2)                      # removes 2 and 3
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterable, Iterator

from ..exceptions import (
    CircularReferenceError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ParentNotFoundError,
)
from ..item import HierarchyItem, ItemId
from .loading import coerce_item, load_items
from .validation import check_integrity, collect_errors

logger = logging.getLogger(__name__)


class HierarchyStore:
    """An in-memory forest of HierarchyItem records.

    HierarchyStore provides:
    - get_all() / get_item(id): Flat access
    - get_children(id) / get_all_children(id): Downward queries
    - get_all_parents(id): Ancestor chain, starting with the item itself
    - add_item / update_item / remove_item: Structural mutations

    Queries and mutations return copies: changing a returned item never
    changes the store. Use update_item to apply changes.

    Construction is unchecked: parents need not exist and cycles are not
    detected, unless ``strict=True`` is given. Use validation_errors() to
    inspect a store loaded from untrusted input.

    Example:
        >>> store = HierarchyStore([(1, None, 'A'), (2, 1, 'B')])
        >>> [c.id for c in store.get_children(1)]
        [2]
    """

    __slots__ = ('_items', '_children')

    def __init__(
        self,
        items: Iterable[Any] | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize a HierarchyStore.

        Args:
            items: Optional initial records. Each can be:
                - HierarchyItem: copied into the store
                - mapping: {'id': ..., 'parent': ..., 'label': ..., **extra}
                - tuple: (id, parent, label) or (id, parent, label, extra)
            strict: If True, raise on the first integrity problem of the
                loaded items instead of accepting them as given.

        Raises:
            ParentNotFoundError: If strict and an item has a missing parent.
            CircularReferenceError: If strict and the items contain a cycle.
        """
        self._items: dict[ItemId, HierarchyItem] = {}
        self._children: dict[ItemId, list[ItemId]] = {}

        if items is not None:
            load_items(self, items)
            logger.debug("HierarchyStore loaded %d items", len(self._items))
            if strict:
                check_integrity(self)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing item ids."""
        return f"HierarchyStore({list(self._items.keys())})"

    def __len__(self) -> int:
        """Return the number of items in the store."""
        return len(self._items)

    def __iter__(self) -> Iterator[HierarchyItem]:
        """Iterate over copies of the items in primary index order."""
        return iter(self.get_all())

    def __contains__(self, item_id: object) -> bool:
        """Check if an item with this id is stored."""
        try:
            return item_id in self._items
        except TypeError:
            return False

    # ==================== Record Access ====================

    def _child_records(self, item_id: ItemId) -> list[HierarchyItem]:
        """Return the stored child records of item_id, not copies."""
        items = self._items
        return [items[c] for c in self._children.get(item_id, ()) if c in items]

    def _descendant_records(self, item_id: ItemId) -> list[HierarchyItem]:
        """Return the stored descendant records of item_id, breadth-first.

        Each record appears once, even when an unchecked bulk load left a
        cycle below item_id.
        """
        result: list[HierarchyItem] = []
        seen: set[ItemId] = {item_id}
        queue = deque(self._child_records(item_id))
        while queue:
            current = queue.popleft()
            if current.id in seen:
                continue
            seen.add(current.id)
            result.append(current)
            queue.extend(self._child_records(current.id))
        return result

    # ==================== Queries ====================

    def get_all(self) -> list[HierarchyItem]:
        """Return all items in primary index order."""
        return [i.copy() for i in self._items.values()]

    def get_item(self, item_id: ItemId) -> HierarchyItem | None:
        """Return the item with this id, or None if unknown."""
        item = self._items.get(item_id)
        return item.copy() if item is not None else None

    def get_children(self, item_id: ItemId) -> list[HierarchyItem]:
        """Return the direct children of item_id in attach order.

        Returns an empty list for leaves and unknown ids.
        """
        return [c.copy() for c in self._child_records(item_id)]

    def get_all_children(self, item_id: ItemId) -> list[HierarchyItem]:
        """Return every descendant of item_id in breadth-first order.

        The traversal is seeded with the direct children of item_id, so
        the item itself is not included.

        Example:
            >>> [i.id for i in store.get_all_children(1)]
            ['91064cee', 3, 4, 5, 6, 7, 8]
        """
        return [c.copy() for c in self._descendant_records(item_id)]

    def get_all_parents(self, item_id: ItemId) -> list[HierarchyItem]:
        """Return the ancestor chain of item_id, starting with the item itself.

        The chain runs [item, parent, grandparent, ...] and stops at a root
        or at the first parent reference that cannot be resolved. Returns an
        empty list if item_id is unknown.

        Example:
            >>> [i.id for i in store.get_all_parents(7)]
            [7, 4, '91064cee', 1]
        """
        current = self._items.get(item_id)
        if current is None:
            return []

        chain = [current]
        seen = {current.id}
        while current.parent is not None and current.parent not in seen:
            parent = self._items.get(current.parent)
            if parent is None:
                break
            chain.append(parent)
            seen.add(parent.id)
            current = parent
        return [i.copy() for i in chain]

    def get_roots(self) -> list[HierarchyItem]:
        """Return the items without a parent, in primary index order."""
        return [i.copy() for i in self._items.values() if i.parent is None]

    def walk(self) -> Iterator[tuple[int, HierarchyItem]]:
        """Yield (depth, item) pairs depth-first, root by root.

        Roots come in primary index order (depth 0), children in attach
        order. Items below a dangling parent are not reached. The walk uses
        an explicit stack, so tree depth is not bounded by the recursion
        limit.

        Example:
            >>> for depth, item in store.walk():
            ...     print('  ' * depth + item.label)
        """
        seen: set[ItemId] = set()
        roots = [i for i in self._items.values() if i.parent is None]
        stack = [(0, root) for root in reversed(roots)]
        while stack:
            depth, item = stack.pop()
            if item.id in seen:
                continue
            seen.add(item.id)
            yield depth, item.copy()
            for child in reversed(self._child_records(item.id)):
                stack.append((depth + 1, child))

    # ==================== Mutations ====================

    def _would_create_cycle(self, item_id: ItemId, new_parent: ItemId) -> bool:
        """True if making new_parent the parent of item_id closes a cycle."""
        if new_parent == item_id:
            return True
        return any(
            child.id == new_parent for child in self._descendant_records(item_id)
        )

    def _check_parent(self, item: HierarchyItem) -> None:
        """Validate item.parent against the current tree shape.

        Raises:
            ParentNotFoundError: If the parent is not stored.
            CircularReferenceError: If the parent is the item or a descendant.
        """
        if item.parent is None:
            return
        if item.parent not in self._items:
            raise ParentNotFoundError(item.parent)
        if self._would_create_cycle(item.id, item.parent):
            raise CircularReferenceError(item.id)

    def _detach(self, item_id: ItemId, parent: ItemId | None) -> None:
        """Remove item_id from the child list of parent, keeping sibling order."""
        if parent is None:
            return
        siblings = self._children.get(parent)
        if siblings:
            siblings[:] = [c for c in siblings if c != item_id]

    def _attach(self, item_id: ItemId, parent: ItemId | None) -> None:
        """Append item_id to the child list of parent."""
        if parent is not None:
            self._children.setdefault(parent, []).append(item_id)

    def add_item(self, item: Any) -> HierarchyItem:
        """Add a new item under an existing parent (or as a root).

        Args:
            item: A HierarchyItem, mapping or tuple (see __init__). The
                store keeps its own copy.

        Returns:
            A copy of the stored item.

        Raises:
            ItemAlreadyExistsError: If the id is already stored.
            ParentNotFoundError: If the parent is not stored.
            CircularReferenceError: If the item would be its own ancestor.
        """
        new_item = coerce_item(item)
        if new_item.id in self._items:
            raise ItemAlreadyExistsError(new_item.id)
        self._check_parent(new_item)

        self._items[new_item.id] = new_item
        self._attach(new_item.id, new_item.parent)
        logger.debug("Added item %r under %r", new_item.id, new_item.parent)
        return new_item.copy()

    def remove_item(self, item_id: ItemId) -> list[HierarchyItem]:
        """Remove an item together with all its descendants.

        Removing an unknown id is a no-op.

        Returns:
            The removed items, the item first and then its descendants in
            breadth-first order. Empty if nothing was removed.
        """
        item = self._items.get(item_id)
        if item is None:
            return []

        descendants = self._descendant_records(item_id)
        for child in descendants:
            del self._items[child.id]
            self._children.pop(child.id, None)

        del self._items[item_id]
        self._children.pop(item_id, None)
        self._detach(item_id, item.parent)

        logger.debug(
            "Removed item %r with %d descendants", item_id, len(descendants)
        )
        return [item, *descendants]

    def update_item(self, updated: Any) -> HierarchyItem:
        """Replace a stored item, moving it if its parent changed.

        Label, parent and extra fields all take the new values. A moved item
        is appended to the child list of its new parent; an item whose
        parent is unchanged keeps its place among its siblings.

        Args:
            updated: A HierarchyItem, mapping or tuple (see __init__) with
                the id of a stored item. The store keeps its own copy.

        Returns:
            A copy of the stored item.

        Raises:
            ItemNotFoundError: If the id is not stored.
            ParentNotFoundError: If the new parent is not stored.
            CircularReferenceError: If the new parent is the item itself or
                one of its descendants.

        Example:
            >>> store.update_item(store.get_item(3).replace(parent='91064cee'))
        """
        new_item = coerce_item(updated)
        existing = self._items.get(new_item.id)
        if existing is None:
            raise ItemNotFoundError(new_item.id)
        self._check_parent(new_item)

        if existing.parent != new_item.parent:
            self._detach(new_item.id, existing.parent)
            self._attach(new_item.id, new_item.parent)
            logger.debug(
                "Moved item %r from %r to %r",
                new_item.id, existing.parent, new_item.parent,
            )

        self._items[new_item.id] = new_item
        logger.debug("Updated item %r", new_item.id)
        return new_item.copy()

    # ==================== Validation ====================

    def validation_errors(self) -> dict[ItemId, list[str]]:
        """Return integrity problems left by an unchecked bulk load.

        Returns:
            Dictionary mapping item ids to their problem lists. Only ids
            with problems are included.

        Example:
            >>> HierarchyStore([(1, 2, 'a'), (2, 1, 'b')]).validation_errors()
            {1: ['circular reference'], 2: ['circular reference']}
        """
        return collect_errors(self)

    @property
    def is_valid(self) -> bool:
        """True if no item has a dangling parent or lies on a cycle."""
        return not collect_errors(self)
