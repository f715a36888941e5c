"""Tests du controle d'acces / Access control tests."""

from sqlalchemy import select

from vehicle_service.models.vehicle import Vehicle
from vehicle_service.services.access import (
    Caller,
    Owned,
    Role,
    Unrestricted,
    can_access,
    parse_roles,
    scope_for,
    scoped,
)


def test_parse_roles():
    assert parse_roles("CUSTOMER") == {"CUSTOMER"}
    assert parse_roles(" admin , employee ") == {"ADMIN", "EMPLOYEE"}
    assert parse_roles("SUPER_ADMIN") == {"SUPER_ADMIN", "ADMIN"}


def test_blank_roles_mean_customer():
    assert parse_roles(None) == {"CUSTOMER"}
    assert parse_roles("") == {"CUSTOMER"}
    assert parse_roles(" , ") == {"CUSTOMER"}


def test_scope_for_customer_is_owned():
    caller = Caller.from_headers(" alice ", "CUSTOMER")
    assert caller.customer_id == "alice"
    assert scope_for(caller) == Owned("alice")


def test_scope_for_privileged_roles():
    for roles in ("ADMIN", "EMPLOYEE", "SUPER_ADMIN", "CUSTOMER,EMPLOYEE"):
        caller = Caller.from_headers("staff", roles)
        assert caller.is_privileged
        assert scope_for(caller) == Unrestricted()


def test_has_any():
    caller = Caller.from_headers("boss", "SUPER_ADMIN")
    assert caller.has_any([Role.ADMIN])
    assert not caller.has_any([Role.CUSTOMER, Role.EMPLOYEE])


def test_can_access():
    assert can_access("alice", Owned("alice"))
    assert not can_access("alice", Owned("bob"))
    assert can_access("alice", Unrestricted())


def test_scoped_query_adds_owner_predicate():
    owned = str(scoped(select(Vehicle), Vehicle, Owned("alice")))
    assert "WHERE vehicles.customer_id" in owned
    unrestricted = str(scoped(select(Vehicle), Vehicle, Unrestricted()))
    assert "WHERE" not in unrestricted
