# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PermissionStore package - Permission-gated hierarchical container.

This package provides the PermissionStore class, a tree of stores where
each store enforces per-property read/write permissions.

The package is organized into:
- core: Main PermissionStore class with permission queries, path
  traversal and export
- loading: Conversion of plain mappings into child stores

Example:
    >>> from genro_permstore import PermissionStore
    >>> store = PermissionStore()
    >>> store.write('config:name', 'MyApp')
    >>> store.read('config:name')
    'MyApp'
"""

from ..node import StoreNode
from .core import PATH_SEPARATOR, PermissionStore, split_path

__all__ = ["PermissionStore", "StoreNode", "PATH_SEPARATOR", "split_path"]
