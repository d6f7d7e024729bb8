# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""AppSettings - Example permission-gated settings container.

A didactic example showing how to use restrict() declarations
to hide and lock properties from generic callers.
"""

from __future__ import annotations

import time

from genro_permstore import PermissionDeniedError, PermissionStore, restrict


class AppSettings(PermissionStore):
    """Application settings with a hidden key and read-only metadata.

    Example:
        >>> settings = AppSettings()
        >>> settings.write('ui:theme', 'dark')
        'dark'
        >>> settings.read('version')
        '1.0'
        >>> settings.read('api_key')  # raises PermissionDeniedError
        >>> settings.entries()['ui']
        {'theme': 'dark'}
    """

    version = restrict('r', '1.0')
    api_key = restrict('none', 'change-me')
    audit = restrict('w')
    database = restrict('r', {'host': 'localhost', 'port': 5432})

    @restrict('r')
    def uptime(self) -> float:
        """Seconds since the settings were created."""
        return time.monotonic() - self._started

    def __init__(self, *args, **kwargs) -> None:
        self._started = time.monotonic()
        super().__init__(*args, **kwargs)


def demo() -> None:
    settings = AppSettings({'ui': {'theme': 'light', 'font_size': 12}})
    settings.write('ui:theme', 'dark')
    settings.write('database:port', 6543)
    settings.write('audit', ['started'])

    for path in ('version', 'ui:theme', 'database:port', 'api_key', 'audit'):
        try:
            print(f"{path} = {settings.read(path)!r}")
        except PermissionDeniedError as e:
            print(f"{path}: {e}")

    try:
        settings.write('version', '2.0')
    except PermissionDeniedError as e:
        print(e)

    print(settings.entries())


if __name__ == '__main__':
    demo()
