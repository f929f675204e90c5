# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HierarchyStore exceptions."""

from __future__ import annotations

from typing import Any


class HierarchyStoreError(Exception):
    """Base exception for HierarchyStore errors.

    Attributes:
        item_id: The identifier the error is about.
    """

    def __init__(self, message: str, item_id: Any = None) -> None:
        super().__init__(message)
        self.item_id = item_id


class ItemAlreadyExistsError(HierarchyStoreError):
    """Raised when adding an item whose id is already stored."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Item with id {item_id!r} already exists", item_id)


class ItemNotFoundError(HierarchyStoreError):
    """Raised when updating an item that is not stored."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Item with id {item_id!r} does not exist", item_id)


class ParentNotFoundError(HierarchyStoreError):
    """Raised when an item references a parent that is not stored.

    ``item_id`` holds the missing parent id.
    """

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Parent with id {item_id!r} does not exist", item_id)


class CircularReferenceError(HierarchyStoreError):
    """Raised when a parent assignment would make an item its own ancestor."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(
            f"Circular reference detected for item {item_id!r}", item_id
        )
