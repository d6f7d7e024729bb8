# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for Permission, restrict() declarations and the permission registry."""

import time

import pytest

from genro_permstore import (
    InvalidPathError,
    InvalidPermissionError,
    Permission,
    PermissionDeniedError,
    PermissionStore,
    Restriction,
    restrict,
)


class TestPermission:
    """Tests for the Permission enum."""

    def test_short_codes(self):
        """Test members compare equal to their codes."""
        assert Permission.READ == 'r'
        assert Permission.WRITE == 'w'
        assert Permission.READ_WRITE == 'rw'
        assert Permission.NONE == 'none'

    def test_coerce_code(self):
        """Test coerce accepts codes and members."""
        assert Permission.coerce('rw') is Permission.READ_WRITE
        assert Permission.coerce(Permission.NONE) is Permission.NONE

    def test_coerce_unknown_raises(self):
        """Test coerce rejects unknown codes."""
        with pytest.raises(InvalidPermissionError, match="Unknown permission"):
            Permission.coerce('x')

    def test_invalid_permission_is_value_error(self):
        """Test InvalidPermissionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Permission.coerce('readonly')

    @pytest.mark.parametrize('perm,can_read,can_write', [
        ('r', True, False),
        ('w', False, True),
        ('rw', True, True),
        ('none', False, False),
    ])
    def test_capabilities(self, perm, can_read, can_write):
        """Test can_read/can_write membership."""
        permission = Permission.coerce(perm)
        assert permission.can_read is can_read
        assert permission.can_write is can_write


class TestDefaultPolicy:
    """Tests for default policy fallback."""

    @pytest.mark.parametrize('policy', ['r', 'w', 'rw', 'none'])
    def test_undeclared_names_follow_default(self, policy):
        """Test names without override use the default policy."""
        store = PermissionStore(default_policy=policy)
        expected = Permission.coerce(policy)
        for name in ('a', 'anything', 'zeta'):
            assert store.permission_of(name) is expected
            assert store.allowed_to_read(name) is expected.can_read
            assert store.allowed_to_write(name) is expected.can_write

    def test_default_is_read_write(self):
        """Test a plain store defaults to 'rw'."""
        store = PermissionStore()
        assert store.default_policy is Permission.READ_WRITE

    def test_default_policy_setter_coerces(self):
        """Test default_policy can be set with a code."""
        store = PermissionStore()
        store.default_policy = 'r'
        assert store.default_policy is Permission.READ
        assert store.allowed_to_write('x') is False

    def test_default_policy_setter_rejects_unknown(self):
        """Test setting an unknown default raises."""
        store = PermissionStore()
        with pytest.raises(InvalidPermissionError):
            store.default_policy = 'bogus'

    def test_class_keyword_default(self):
        """Test default policy set with a class keyword."""
        class Locked(PermissionStore, default_policy='r'):
            pass

        assert Locked().default_policy is Permission.READ
        assert PermissionStore().default_policy is Permission.READ_WRITE

    def test_constructor_overrides_class_default(self):
        """Test constructor argument wins over class keyword."""
        class Locked(PermissionStore, default_policy='r'):
            pass

        assert Locked(default_policy='none').default_policy is Permission.NONE


class TestInstanceRestrict:
    """Tests for store.restrict()."""

    def test_restrict_overrides_default(self):
        """Test an instance override takes precedence."""
        store = PermissionStore()
        store.restrict('secret', 'none')
        assert store.allowed_to_read('secret') is False
        assert store.allowed_to_write('secret') is False
        assert store.allowed_to_read('other') is True

    def test_restrict_without_permission_captures_default(self):
        """Test the default is captured once, not re-evaluated."""
        store = PermissionStore(default_policy='r')
        assert store.restrict('name') is Permission.READ
        store.default_policy = 'w'
        assert store.permission_of('name') is Permission.READ
        assert store.permission_of('other') is Permission.WRITE

    def test_declared_name_rejects_path(self):
        """Test a declared name containing ':' is rejected like restrict()."""
        with pytest.raises(InvalidPathError, match="may not contain"):
            type('Bad', (PermissionStore,), {'a:b': restrict('r')})

    def test_restrict_rejects_path(self):
        """Test property names may not contain ':'."""
        store = PermissionStore()
        with pytest.raises(InvalidPathError):
            store.restrict('a:b', 'r')

    def test_restrict_is_per_instance(self):
        """Test instance overrides are not shared."""
        a = PermissionStore()
        b = PermissionStore()
        a.restrict('x', 'none')
        assert b.allowed_to_read('x') is True


class TestDeclarations:
    """Tests for restrict() in class bodies."""

    def test_declared_marker(self):
        """Test restrict() returns a Restriction."""
        marker = restrict('r', 1)
        assert isinstance(marker, Restriction)
        assert marker.permission is Permission.READ
        assert marker.has_value
        assert not restrict('r').has_value

    def test_declared_permissions_and_values(self):
        """Test declared values seed every instance."""
        class Account(PermissionStore):
            owner = restrict('r', 'alice')
            token = restrict('none', 's3cr3t')
            notes = restrict('w')

        account = Account()
        assert account.read('owner') == 'alice'
        assert account.entries() == {'owner': 'alice'}
        assert account.allowed_to_write('owner') is False
        assert account.allowed_to_read('notes') is False
        assert 'notes' not in account
        with pytest.raises(PermissionDeniedError):
            account.read('token')

    def test_markers_removed_from_class(self):
        """Test declarations do not remain as class attributes."""
        class Account(PermissionStore):
            owner = restrict('r', 'alice')

        assert 'owner' not in Account.__dict__

    def test_declaration_without_permission_uses_class_default(self):
        """Test restrict() with no permission captures the class default."""
        class Locked(PermissionStore, default_policy='r'):
            name = restrict(value='x')

        store = Locked(default_policy='rw')
        assert store.permission_of('name') is Permission.READ
        assert store.permission_of('other') is Permission.READ_WRITE

    def test_declared_mapping_is_normalized(self):
        """Test a declared mapping becomes a child store."""
        class Settings(PermissionStore):
            db = restrict('r', {'host': 'localhost'})

        settings = Settings()
        assert isinstance(settings.read('db'), PermissionStore)
        assert settings.read('db:host') == 'localhost'

    def test_declared_values_not_shared(self):
        """Test mutable declared values are copied per instance."""
        class Bag(PermissionStore):
            items = restrict('rw', [1, 2])

        a = Bag()
        b = Bag()
        a.read('items').append(3)
        assert b.read('items') == [1, 2]

    def test_decorated_method_is_bound_producer(self):
        """Test @restrict on a method declares a bound producer."""
        class Counter(PermissionStore):
            def __init__(self, *args, **kwargs):
                self.calls = 0
                super().__init__(*args, **kwargs)

            @restrict('r')
            def tick(self):
                self.calls += 1
                return self.calls

        counter = Counter()
        assert counter.read('tick') == 1
        assert counter.read('tick') == 2
        assert counter.entries() == {'tick': 3}

    def test_declared_producer_lambda(self):
        """Test a declared lambda is a producer, evaluated on read."""
        class Clock(PermissionStore):
            now = restrict('r', lambda: time.time())

        clock = Clock()
        assert isinstance(clock.read('now'), float)

    def test_subclass_merges_declarations(self):
        """Test declarations are inherited and can be overridden."""
        class Base(PermissionStore):
            a = restrict('r', 1)
            b = restrict('none', 2)

        class Child(Base):
            b = restrict('rw')
            c = restrict('w', 3)

        child = Child()
        assert child.entries() == {'a': 1, 'b': 2}
        assert child.permission_of('c') is Permission.WRITE
        assert Base().permission_of('b') is Permission.NONE

    def test_decorator_requires_callable(self):
        """Test @restrict rejects non-callables."""
        with pytest.raises(TypeError, match="expects a callable"):
            restrict('r')(42)

    def test_decorator_rejects_declared_value(self):
        """Test @restrict cannot combine a value and a decorated method."""
        with pytest.raises(TypeError, match="cannot also declare a value"):
            class Clash(PermissionStore):
                @restrict('r', 'x')
                def now(self):
                    return 1
