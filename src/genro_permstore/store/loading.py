# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading plain data into a PermissionStore.

Plain mappings written into a store are converted into child stores,
so every nested object in the tree is itself governed by permissions.
Lists, scalars, producers and existing stores are kept as they are.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .core import PermissionStore


def load_from_dict(store: PermissionStore, source: Mapping[str, Any]) -> None:
    """Write every item of source into store, in the mapping's order.

    Each key goes through store.write(), so keys containing ':' are
    treated as paths and every write is permission checked. There is no
    rollback: a denied key aborts the load and earlier writes remain.

    Args:
        store: Target PermissionStore.
        source: Mapping of paths to values.
    """
    for key, value in source.items():
        store.write(key, value)


def normalize_value(store: PermissionStore, value: Any) -> Any:
    """Return the representation of value to be stored in store.

    A mapping that is not already a store becomes a fresh child store
    (built by store._new_branch()) loaded with the mapping's items.
    Anything else is returned unchanged.
    """
    from .core import PermissionStore

    if isinstance(value, Mapping) and not isinstance(value, PermissionStore):
        child = store._new_branch()
        load_from_dict(child, value)
        return child
    return value
