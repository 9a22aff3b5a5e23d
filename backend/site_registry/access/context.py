"""
Lightweight caller context for access-scoped queries.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """
    The caller whose accessible sites narrow a query.

    Superusers see every live site; everyone else is limited to the sites
    granted to their login.
    """

    login: str
    is_superuser: bool = False
