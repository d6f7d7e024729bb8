# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""PermissionStore exceptions."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for PermissionStore errors."""

    pass


class PermissionDeniedError(StoreError):
    """Raised when a property may not be read, written or traversed.

    Attributes:
        label: The property name that was refused.
        access: The refused access: 'read', 'write' or 'traverse'.
    """

    def __init__(self, label: str, access: str = 'read') -> None:
        self.label = label
        self.access = access
        super().__init__(f"{access.capitalize()} access to property '{label}' is denied.")


class InvalidPathError(StoreError, ValueError):
    """Raised when a path is empty or contains an empty segment."""

    pass


class InvalidPermissionError(StoreError, ValueError):
    """Raised when a value is not a known permission code."""

    pass
