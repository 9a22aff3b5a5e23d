"""
Helpers to keep site queries narrowed to what a principal may access.

A scope turns a site-id column into a SQL boolean, so it can be intersected
inside any query without knowing how the accessible set was produced.
"""

from typing import Iterable, Protocol

from sqlalchemy import false, select, true

from site_registry.access.context import Principal
from site_registry.core.errors import InvalidArgument
from site_registry.core.utils import coerce_site_ids
from site_registry.models.site_access import SiteAccess


class AccessScope(Protocol):
    def restrict(self, site_id_column):
        ...


class UnrestrictedScope:
    def restrict(self, site_id_column):
        return true()

    def __repr__(self) -> str:
        return "UnrestrictedScope()"


class SiteIdSetScope:
    """Scope over a pre-fetched set of site ids. An empty set grants nothing."""

    def __init__(self, site_ids: Iterable[int]) -> None:
        self.site_ids = frozenset(coerce_site_ids(site_ids))

    def restrict(self, site_id_column):
        if not self.site_ids:
            return false()
        return site_id_column.in_(sorted(self.site_ids))

    def __repr__(self) -> str:
        return f"SiteIdSetScope({sorted(self.site_ids)!r})"


class GrantTableScope:
    """Scope expressed as a sub-query over the access grant table."""

    def __init__(self, login: str) -> None:
        if not login:
            raise InvalidArgument("Login is required for a grant scope.")
        self.login = login

    def accessible_site_ids(self):
        return select(SiteAccess.site_id).where(SiteAccess.login == self.login)

    def restrict(self, site_id_column):
        return site_id_column.in_(self.accessible_site_ids())

    def __repr__(self) -> str:
        return f"GrantTableScope({self.login!r})"


def scope_for_principal(principal: Principal) -> AccessScope:
    """
    Build the scope for a principal.

    Example:
        scope = scope_for_principal(Principal(login="alice"))
        db.query(Site).filter(scope.restrict(Site.id)).all()
    """
    if principal is None:
        raise InvalidArgument("Principal is required.")
    if principal.is_superuser:
        return UnrestrictedScope()
    return GrantTableScope(principal.login)
