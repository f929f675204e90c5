# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HierarchyStore item class."""

from __future__ import annotations

from typing import Any, Mapping, Union

ItemId = Union[str, int]

_RESERVED_KEYS = ('id', 'parent', 'label')


def check_item_id(value: Any, what: str = 'id') -> None:
    """Raise TypeError unless value is a str or a (non-bool) int.

    bool is rejected because True/False hash and compare equal to 1/0
    and would collide with integer ids.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(
            f"item {what} must be str or int, not {type(value).__name__}"
        )


def same_id(a: ItemId | None, b: ItemId | None) -> bool:
    """True if a and b are the same identifier (same type, same value)."""
    return type(a) is type(b) and a == b


class HierarchyItem:
    """A labeled record placed in a forest by its parent reference.

    Each item has:
    - id: Unique identifier (str or int; '1' and 1 are different ids)
    - parent: Identifier of the parent item, or None for a root
    - label: Display label
    - extra: Opaque dictionary of additional fields

    Example:
        >>> item = HierarchyItem(4, '91064cee', 'Item 4', color='red')
        >>> item.parent
        '91064cee'
        >>> item.extra
        {'color': 'red'}
    """

    __slots__ = ('id', 'parent', 'label', 'extra')

    def __init__(
        self,
        id: ItemId,
        parent: ItemId | None = None,
        label: str = '',
        _extra: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a HierarchyItem.

        Args:
            id: The item identifier.
            parent: The parent identifier, or None for a root.
            label: The display label.
            _extra: Optional mapping of extra fields.
            **kwargs: Additional extra fields as keyword arguments.

        Raises:
            TypeError: If id or parent is not str/int, or label is not str.
        """
        check_item_id(id)
        if parent is not None:
            check_item_id(parent, 'parent')
        if not isinstance(label, str):
            raise TypeError(f"item label must be str, not {type(label).__name__}")
        self.id = id
        self.parent = parent
        self.label = label
        self.extra: dict[str, Any] = dict(_extra) if _extra else {}
        self.extra.update(kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HierarchyItem:
        """Build an item from a flat record.

        Keys other than id, parent and label become extra fields.

        Example:
            >>> HierarchyItem.from_dict({'id': 1, 'parent': None, 'label': 'A', 'x': 1})
            HierarchyItem(1, parent=None, label='A')
        """
        extra = {k: v for k, v in data.items() if k not in _RESERVED_KEYS}
        return cls(data['id'], data.get('parent'), data.get('label', ''), extra)

    def as_dict(self) -> dict[str, Any]:
        """Return the item as a flat record (id, parent, label, extra fields)."""
        result: dict[str, Any] = {
            'id': self.id,
            'parent': self.parent,
            'label': self.label,
        }
        result.update(self.extra)
        return result

    def copy(self) -> HierarchyItem:
        """Return a copy with its own extra dictionary."""
        return HierarchyItem(self.id, self.parent, self.label, self.extra)

    def replace(self, **changes: Any) -> HierarchyItem:
        """Return a copy with the given fields replaced.

        Example:
            >>> store.update_item(store.get_item(3).replace(parent='91064cee'))
        """
        fields = {
            'id': self.id,
            'parent': self.parent,
            'label': self.label,
            '_extra': self.extra,
        }
        if 'extra' in changes:
            changes['_extra'] = changes.pop('extra')
        unknown = set(changes) - set(fields)
        if unknown:
            raise TypeError(f"unknown item fields: {', '.join(sorted(unknown))}")
        fields.update(changes)
        return HierarchyItem(**fields)

    @property
    def is_root(self) -> bool:
        """True if this item has no parent."""
        return self.parent is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HierarchyItem):
            return NotImplemented
        return (
            same_id(self.id, other.id)
            and same_id(self.parent, other.parent)
            and self.label == other.label
            and self.extra == other.extra
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"HierarchyItem({self.id!r}, parent={self.parent!r}, "
            f"label={self.label!r})"
        )
