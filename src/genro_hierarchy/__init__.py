# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Hierarchy - A forest of labeled items linked by parent references.

A lightweight, zero-dependency library that keeps a flat collection of
records organized as rooted trees, for the Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .exceptions import (
    CircularReferenceError,
    HierarchyStoreError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    ParentNotFoundError,
)
from .item import HierarchyItem, ItemId
from .paths import id_path, label_path, tree_rows
from .store import HierarchyStore

__all__ = [
    # Core classes
    "HierarchyStore",
    "HierarchyItem",
    "ItemId",
    # Display helpers
    "id_path",
    "label_path",
    "tree_rows",
    # Exceptions
    "HierarchyStoreError",
    "ItemAlreadyExistsError",
    "ItemNotFoundError",
    "ParentNotFoundError",
    "CircularReferenceError",
]
