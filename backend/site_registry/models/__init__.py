from .sites import Site
from .site_urls import SiteUrl
from .site_access import SiteAccess
from .log_visits import LogVisit

__all__ = [
    "Site",
    "SiteUrl",
    "SiteAccess",
    "LogVisit",
]
