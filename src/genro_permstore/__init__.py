# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-PermStore - Hierarchical key/value store with per-property permissions.

A lightweight, zero-dependency library providing a permission-gated
settings/state container for the Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .exceptions import (
    InvalidPathError,
    InvalidPermissionError,
    PermissionDeniedError,
    StoreError,
)
from .node import StoreNode
from .permissions import Permission, Restriction, restrict
from .store import PATH_SEPARATOR, PermissionStore

__all__ = [
    # Core classes
    "PermissionStore",
    "StoreNode",
    "PATH_SEPARATOR",
    # Permissions
    "Permission",
    "Restriction",
    "restrict",
    # Exceptions
    "StoreError",
    "PermissionDeniedError",
    "InvalidPathError",
    "InvalidPermissionError",
]
