# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Permission codes and definition-time property declarations."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from .exceptions import InvalidPathError, InvalidPermissionError


class Permission(str, Enum):
    """Access granted on a single property.

    Members compare equal to their short codes, so ``'rw'`` can be used
    wherever ``Permission.READ_WRITE`` is expected.

    Example:
        >>> Permission.coerce('r').can_read
        True
        >>> Permission.READ.can_write
        False
    """

    READ = 'r'
    WRITE = 'w'
    READ_WRITE = 'rw'
    NONE = 'none'

    @classmethod
    def coerce(cls, value: Permission | str) -> Permission:
        """Return the Permission for a member or a short code.

        Raises:
            InvalidPermissionError: If value is not a known code.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidPermissionError(
                f"Unknown permission {value!r}, expected one of "
                f"{', '.join(repr(p.value) for p in cls)}"
            ) from None

    @property
    def can_read(self) -> bool:
        return self in (Permission.READ, Permission.READ_WRITE)

    @property
    def can_write(self) -> bool:
        return self in (Permission.WRITE, Permission.READ_WRITE)


MISSING: Any = object()


class Restriction:
    """Declaration of a property permission inside a store class body.

    Created by :func:`restrict`. When the owning class is created the
    marker is removed from the class namespace and recorded in the
    class permission table; a declared value seeds every new instance.
    """

    __slots__ = ('permission', 'value', 'bound')

    def __init__(
        self,
        permission: Permission | str | None = None,
        value: Any = MISSING,
        bound: bool = False,
    ) -> None:
        self.permission = None if permission is None else Permission.coerce(permission)
        self.value = value
        self.bound = bound

    def __repr__(self) -> str:
        perm = self.permission.value if self.permission is not None else 'default'
        return f"Restriction({perm!r})"

    def __call__(self, func: Callable[..., Any]) -> Restriction:
        """Use the marker as a method decorator, declaring a bound producer.

        Raises:
            TypeError: If func is not callable, or the marker already
                carries a value.

        Example:
            >>> class Clock(PermissionStore):
            ...     @restrict('r')
            ...     def now(self):
            ...         return time.time()
        """
        if not callable(func):
            raise TypeError(f"@restrict expects a callable, not {type(func).__name__}")
        if self.has_value:
            raise TypeError("@restrict used as a decorator cannot also declare a value")
        return Restriction(self.permission, func, bound=True)

    @property
    def has_value(self) -> bool:
        return self.value is not MISSING


def restrict(permission: Permission | str | None = None, value: Any = MISSING) -> Restriction:
    """Declare a property permission in a PermissionStore subclass.

    Args:
        permission: The permission to grant. If None, the class default
            policy at class-creation time is captured.
        value: Optional initial value for every instance. Mappings are
            normalized into child stores; callables become producers.

    Example:
        >>> class Account(PermissionStore):
        ...     owner = restrict('r', 'alice')
        ...     token = restrict('none', 's3cr3t')
        ...     notes = restrict('w')
    """
    return Restriction(permission, value)


def collect_restrictions(
    namespace: dict[str, Any], default_policy: Permission
) -> tuple[dict[str, Permission], dict[str, Restriction]]:
    """Extract Restriction markers from a class namespace.

    Returns:
        Tuple of (permissions, declared) where permissions maps each
        declared name to its resolved Permission and declared maps the
        names that carry an initial value to their marker.
    """
    permissions: dict[str, Permission] = {}
    declared: dict[str, Restriction] = {}
    for name, attr in namespace.items():
        if not isinstance(attr, Restriction):
            continue
        if ':' in name:
            raise InvalidPathError(f"Property name {name!r} may not contain ':'")
        permissions[name] = attr.permission if attr.permission is not None else default_policy
        if attr.has_value:
            declared[name] = attr
    return permissions, declared
