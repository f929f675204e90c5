# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HierarchyStore package - A forest of items linked by parent references.

This package provides the HierarchyStore class, an in-memory store that
arranges a flat list of labeled items into rooted trees.

The package is organized into:
- core: Main HierarchyStore class with queries and validated mutations
- loading: Functions turning input records into store-owned items
- validation: Integrity report for stores built from unchecked input

Example:
    >>> from genro_hierarchy import HierarchyStore
    >>> store = HierarchyStore([(1, None, 'Root'), (2, 1, 'Child')])
    >>> [i.label for i in store.get_all_parents(2)]
    ['Child', 'Root']
"""

from .core import HierarchyStore

__all__ = ["HierarchyStore"]
