# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PermissionStore - A hierarchical, permission-gated key/value store.

This module provides the PermissionStore class, the core container of
the genro-permstore library. Every store holds named properties and a
permission policy; nested plain mappings are promoted to child stores so
each level of the tree is governed on its own.

Key Features:
    - **Per-property permissions**: 'r', 'w', 'rw' or 'none', with a
      default policy for undeclared names
    - **Path navigation**: Colon-delimited paths ('a:b:c')
    - **Autocreate**: Intermediate stores are created on write
    - **Lazy values**: Producers are invoked on every read
    - **Filtered export**: entries() omits unreadable properties

Path Syntax:
    - Colon paths: 'parent:child:grandchild'
    - Segments may not be empty; there is no escaping or indexing

Example:
    Basic usage::

        store = PermissionStore()
        store.write('config:database:host', 'localhost')
        store.read('config:database:host')  # 'localhost'

    Declared permissions::

        class Account(PermissionStore):
            owner = restrict('r', 'alice')
            token = restrict('none', 's3cr3t')

        account = Account()
        account.entries()  # {'owner': 'alice'}
        account.read('token')  # raises PermissionDeniedError
"""

from __future__ import annotations

import copy
import logging
import types
from collections.abc import Mapping
from typing import Any, ClassVar, Iterator

from ..exceptions import InvalidPathError, PermissionDeniedError
from ..node import StoreNode, is_producer
from ..permissions import Permission, Restriction, collect_restrictions
from .loading import load_from_dict, normalize_value

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ':'


def split_path(path: str) -> list[str]:
    """Split a colon path into its segments.

    Raises:
        InvalidPathError: If the path is not a string, or it or any of its
            segments is empty.
    """
    if not isinstance(path, str):
        raise InvalidPathError(f"Path must be a string, not {type(path).__name__}")
    if not path:
        raise InvalidPathError("Empty path")
    parts = path.split(PATH_SEPARATOR)
    if not all(parts):
        raise InvalidPathError(f"Empty segment in path '{path}'")
    return parts


class PermissionStore:
    """A hierarchical key/value container with per-property permissions.

    PermissionStore provides:
    - read(path) / store[path]: Get values, checking read permission
    - write(path, value) / store[path] = value: Set values with autocreate
    - write_entries(mapping): Write many paths at once
    - entries(): Export readable properties as a plain dict
    - allowed_to_read(name) / allowed_to_write(name): Permission queries

    Permissions are declared on subclasses with restrict(), or on an
    instance with store.restrict(). A property without an explicit
    permission uses the store's default_policy.

    Example:
        >>> store = PermissionStore({'a': {'b': 1}})
        >>> store.read('a:b')
        1
        >>> store.entries()
        {'a': {'b': 1}}
    """

    __slots__ = ('_nodes', '_permissions', '_default_policy')

    _class_default_policy: ClassVar[Permission] = Permission.READ_WRITE
    _class_permissions: ClassVar[dict[str, Permission]] = {}
    _class_declared: ClassVar[dict[str, Restriction]] = {}

    def __init_subclass__(
        cls, default_policy: Permission | str | None = None, **kwargs: Any
    ) -> None:
        """Collect restrict() declarations from the subclass body.

        Args:
            default_policy: Default policy for instances of the subclass.
                If None, the base class default is inherited.
        """
        super().__init_subclass__(**kwargs)
        if default_policy is not None:
            cls._class_default_policy = Permission.coerce(default_policy)

        permissions, declared = collect_restrictions(
            dict(cls.__dict__), cls._class_default_policy
        )
        for name in permissions:
            delattr(cls, name)

        cls._class_permissions = {**cls._class_permissions, **permissions}
        cls._class_declared = {**cls._class_declared, **declared}

    def __init__(
        self,
        source: Mapping[str, Any] | PermissionStore | None = None,
        default_policy: Permission | str | None = None,
    ) -> None:
        """Initialize a PermissionStore.

        Args:
            source: Optional initial data, written with write_entries()
                after declared values are seeded.
            default_policy: Permission for properties without an explicit
                one. Defaults to the class default ('rw' unless the
                subclass sets it).

        Example:
            >>> PermissionStore({'a': 1, 'b': {'c': 2}})
            >>> PermissionStore(default_policy='r')
        """
        self._nodes: dict[str, StoreNode] = {}
        self._permissions: dict[str, Permission] = dict(type(self)._class_permissions)
        if default_policy is None:
            self._default_policy = type(self)._class_default_policy
        else:
            self._default_policy = Permission.coerce(default_policy)

        self._seed_declared()

        if source is not None:
            self.write_entries(source)

    def _seed_declared(self) -> None:
        """Set the initial values declared on the class, bypassing checks."""
        for name, marker in type(self)._class_declared.items():
            if marker.bound:
                value = types.MethodType(marker.value, self)
            elif is_producer(marker.value):
                value = marker.value
            else:
                value = copy.deepcopy(marker.value)
            self._set_node(name, normalize_value(self, value))

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing readable labels."""
        return f"{type(self).__name__}({self.keys()})"

    def __len__(self) -> int:
        """Return the number of properties in this store."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[str]:
        """Iterate over readable labels in insertion order."""
        return iter(self.keys())

    def __contains__(self, path: str) -> bool:
        """Check if a label or colon path exists.

        Intermediate stores must be readable; permission failures and
        invalid paths count as not found.
        """
        try:
            parts = split_path(path)
        except InvalidPathError:
            return False

        current = self
        for part in parts[:-1]:
            node = current._nodes.get(part)
            if node is None or not node.is_branch or not current.allowed_to_read(part):
                return False
            current = node.value
        return parts[-1] in current._nodes

    def __getitem__(self, path: str) -> Any:
        """Alias for read()."""
        return self.read(path)

    def __setitem__(self, path: str, value: Any) -> None:
        """Alias for write()."""
        self.write(path, value)

    # ==================== Permissions ====================

    @property
    def default_policy(self) -> Permission:
        """Permission applied to properties without an explicit one."""
        return self._default_policy

    @default_policy.setter
    def default_policy(self, value: Permission | str) -> None:
        self._default_policy = Permission.coerce(value)

    def restrict(self, name: str, permission: Permission | str | None = None) -> Permission:
        """Set an explicit permission for a property of this instance.

        Args:
            name: Property name (a single segment).
            permission: The permission to grant. If None, the current
                default_policy is captured; later changes to the default
                do not affect it.

        Returns:
            The recorded Permission.
        """
        if not name or PATH_SEPARATOR in name:
            raise InvalidPathError(f"Invalid property name: {name!r}")
        resolved = self._default_policy if permission is None else Permission.coerce(permission)
        self._permissions[name] = resolved
        return resolved

    def permission_of(self, name: str) -> Permission:
        """Return the effective permission for a property name."""
        return self._permissions.get(name, self._default_policy)

    def allowed_to_read(self, name: str) -> bool:
        return self.permission_of(name).can_read

    def allowed_to_write(self, name: str) -> bool:
        return self.permission_of(name).can_write

    # ==================== Core API ====================

    def read(self, path: str) -> Any:
        """Get the value at the given colon path.

        Read permission is checked on every store crossed. Producers are
        invoked and their result is used. A segment that does not exist
        leaves the current value unchanged, so a missing path returns the
        last value reached (the store itself if nothing matched).

        Args:
            path: Colon path (e.g., 'config:database:host').

        Returns:
            The value at the path.

        Raises:
            InvalidPathError: If the path has an empty segment.
            PermissionDeniedError: If a crossed property is not readable.

        Example:
            >>> store.read('config:database:host')
            'localhost'
        """
        current: Any = self
        for part in split_path(path):
            if isinstance(current, PermissionStore):
                if not current.allowed_to_read(part):
                    logger.debug(f"Read of '{part}' denied in path '{path}'")
                    raise PermissionDeniedError(part, 'read')
                node = current._nodes.get(part)
                if node is not None:
                    current = node.resolve()
            elif isinstance(current, Mapping) and part in current:
                current = current[part]
                if is_producer(current):
                    current = current()
        return current

    def write(self, path: str, value: Any) -> Any:
        """Set a value at the given colon path, creating stores as needed.

        Crossing an existing property needs read or write permission;
        creating a missing one needs write permission. A crossed property
        that is missing or does not hold a store is replaced by a new
        empty store. The final property must be writable. Mappings are
        converted into child stores before being stored.

        Args:
            path: Colon path to the property.
            value: The value to store.

        Returns:
            The value as passed in, not the stored representation.

        Raises:
            InvalidPathError: If the path has an empty segment.
            PermissionDeniedError: If traversal or the final write is denied.

        Example:
            >>> store.write('config:debug', True)
            True
            >>> store.write('config:db', {'host': 'localhost'})
            {'host': 'localhost'}
        """
        parts = split_path(path)
        current = self

        for part in parts[:-1]:
            node = current._nodes.get(part)
            if node is None:
                can_traverse = current.allowed_to_write(part)
            else:
                can_traverse = current.allowed_to_read(part) or current.allowed_to_write(part)
            if not can_traverse:
                logger.debug(f"Traversal of '{part}' denied in path '{path}'")
                raise PermissionDeniedError(part, 'traverse')

            if node is None or not node.is_branch:
                logger.debug(f"Creating intermediate store '{part}' in path '{path}'")
                node = current._set_node(part, current._new_branch())
            current = node.value

        label = parts[-1]
        if not current.allowed_to_write(label):
            logger.debug(f"Write of '{label}' denied in path '{path}'")
            raise PermissionDeniedError(label, 'write')

        current._set_node(label, normalize_value(current, value))
        return value

    def write_entries(self, entries: Mapping[str, Any] | PermissionStore) -> None:
        """Write every item of entries, in order.

        Keys may be colon paths. Each write is checked separately and
        there is no rollback: a denied key aborts and earlier writes stay.

        Args:
            entries: A mapping of paths to values, or another store whose
                readable entries() are copied.
        """
        if isinstance(entries, PermissionStore):
            entries = entries.entries()
        load_from_dict(self, entries)

    def entries(self) -> dict[str, Any]:
        """Convert to plain dict (recursive), omitting unreadable properties.

        Child stores are exported with their own entries(). Producers are
        invoked once and their result is used as is.

        Returns:
            A new nested dictionary.
        """
        result: dict[str, Any] = {}
        for label, node in self._nodes.items():
            if not self.allowed_to_read(label):
                continue
            if node.is_branch:
                result[label] = node.value.entries()
            else:
                result[label] = node.resolve()
        return result

    # ==================== Nodes ====================

    def keys(self) -> list[str]:
        """Return readable labels in insertion order."""
        return [label for label in self._nodes if self.allowed_to_read(label)]

    def get_node(self, label: str) -> StoreNode:
        """Get the slot for a direct property, without resolving it.

        Raises:
            PermissionDeniedError: If the property is not readable.
            KeyError: If the property does not exist.
        """
        if not self.allowed_to_read(label):
            raise PermissionDeniedError(label, 'read')
        return self._nodes[label]

    def _set_node(self, label: str, value: Any) -> StoreNode:
        """Store value under label, keeping the position of an existing slot."""
        node = self._nodes.get(label)
        if node is None:
            node = StoreNode(label, value, parent=self)
            self._nodes[label] = node
        else:
            node.value = value
        return node

    def _new_branch(self) -> PermissionStore:
        """Create the store used for autocreated and normalized children."""
        return PermissionStore()
