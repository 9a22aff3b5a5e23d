"Access scoping: caller context and site-id predicates for scoped queries."

from .context import Principal  # noqa: F401
from .scoping import (  # noqa: F401
    AccessScope,
    GrantTableScope,
    SiteIdSetScope,
    UnrestrictedScope,
    scope_for_principal,
)
