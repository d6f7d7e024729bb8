# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PermissionStore node class."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import PermissionStore


def is_producer(value: Any) -> bool:
    """True if value is a zero-argument producer rather than data.

    Stores are callable but are never treated as producers. Classes are
    producers, so `list` or `dict` yield a fresh empty value on every read.
    """
    from .store import PermissionStore
    return callable(value) and not isinstance(value, PermissionStore)


class StoreNode:
    """A labelled slot in a PermissionStore.

    Each node has:
    - label: The property name, unique within its parent
    - value: A scalar, a list, a PermissionStore (for children) or a
      zero-argument producer
    - parent: Reference to the owning PermissionStore

    Example:
        >>> node = StoreNode('user', 'Alice')
        >>> node.label
        'user'
        >>> node.resolve()
        'Alice'
    """

    __slots__ = ('label', 'value', 'parent')

    def __init__(
        self,
        label: str,
        value: Any = None,
        parent: PermissionStore | None = None,
    ) -> None:
        """Initialize a StoreNode.

        Args:
            label: The property name.
            value: The stored value.
            parent: The PermissionStore owning this slot.
        """
        self.label = label
        self.value = value
        self.parent = parent

    def __repr__(self) -> str:
        from .store import PermissionStore
        if isinstance(self.value, PermissionStore):
            value_repr = f"PermissionStore({len(self.value)})"
        elif self.is_producer:
            value_repr = '<producer>'
        else:
            value_repr = repr(self.value)
        return f"StoreNode({self.label!r}, value={value_repr})"

    @property
    def is_branch(self) -> bool:
        """True if this node contains a PermissionStore (has children)."""
        from .store import PermissionStore
        return isinstance(self.value, PermissionStore)

    @property
    def is_producer(self) -> bool:
        """True if the value is computed on access."""
        return is_producer(self.value)

    def resolve(self) -> Any:
        """Return the value, invoking a producer on every call."""
        if self.is_producer:
            return self.value()
        return self.value
