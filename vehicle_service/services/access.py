"""
Controle d'acces par proprietaire / Ownership-scoped access control.

Transforme l'appelant (identite + roles fournis par la gateway) en une portee
explicite : Owned(customer_id) ou Unrestricted. Aucune I/O ici, on fournit
seulement le predicat applique par les requetes.
Turns the caller (gateway-provided identity + roles) into an explicit scope.
No I/O here: this module only supplies the predicate the store queries apply.
"""

import enum
from dataclasses import dataclass, field

from sqlalchemy import Select


class Role(str, enum.Enum):
    """Roles reconnus / Recognized roles."""
    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


# Roles qui contournent le controle de propriete / Roles that bypass the ownership check
PRIVILEGED_ROLES = frozenset({Role.ADMIN.value, Role.EMPLOYEE.value, Role.SUPER_ADMIN.value})


@dataclass(frozen=True)
class Owned:
    """Acces limite aux ressources du client / Access limited to the customer's resources."""
    customer_id: str


@dataclass(frozen=True)
class Unrestricted:
    """Acces a toute ressource par ID / Access to any resource by ID alone."""


Scope = Owned | Unrestricted


def parse_roles(roles_header: str | None) -> frozenset[str]:
    """Parser le header des roles / Parse the comma-separated roles header.

    SUPER_ADMIN implique ADMIN. Header absent ou vide -> CUSTOMER.
    SUPER_ADMIN implies ADMIN. Missing or blank header -> CUSTOMER.
    """
    roles = {r.strip().upper() for r in (roles_header or "").split(",") if r.strip()}
    if Role.SUPER_ADMIN.value in roles:
        roles.add(Role.ADMIN.value)
    if not roles:
        roles.add(Role.CUSTOMER.value)
    return frozenset(roles)


@dataclass(frozen=True)
class Caller:
    """Appelant authentifie par la gateway / Gateway-authenticated caller."""
    customer_id: str
    roles: frozenset[str] = field(default_factory=lambda: frozenset({Role.CUSTOMER.value}))

    @classmethod
    def from_headers(cls, subject: str, roles_header: str | None) -> "Caller":
        return cls(customer_id=subject.strip(), roles=parse_roles(roles_header))

    @property
    def is_privileged(self) -> bool:
        return bool(self.roles & PRIVILEGED_ROLES)

    def has_any(self, roles) -> bool:
        return any(Role(r).value in self.roles for r in roles)


def scope_for(caller: Caller) -> Scope:
    """Portee de l'appelant / Caller's scope."""
    if caller.is_privileged:
        return Unrestricted()
    return Owned(caller.customer_id)


def can_access(owner_id: str, scope: Scope) -> bool:
    """Decision allow/deny pour une ressource dont le proprietaire est connu."""
    if isinstance(scope, Unrestricted):
        return True
    return owner_id == scope.customer_id


def scoped(query: Select, model, scope: Scope) -> Select:
    """Appliquer le predicat de propriete / Apply the ownership predicate to a query."""
    if isinstance(scope, Owned):
        return query.where(model.customer_id == scope.customer_id)
    return query
