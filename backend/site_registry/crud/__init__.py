from .sites import (
    create_site,
    get_site,
    site_exists,
    list_sites,
    list_site_ids,
    list_sites_by_ids,
    update_site,
    soft_delete_site,
    purge_site,
    list_sites_by_group,
    list_groups,
    list_site_ids_by_timezones,
    list_distinct_timezones,
    list_distinct_types,
    list_site_ids_with_visits,
    backfill_created_at,
)
from .site_urls import (
    add_alias_url,
    add_alias_urls,
    list_alias_urls,
    clear_alias_urls,
    list_site_urls,
)
from .site_access import (
    grant_access,
    list_grants_for_site,
    list_accessible_site_ids,
)
from .search import search_sites

__all__ = [
    "create_site",
    "get_site",
    "site_exists",
    "list_sites",
    "list_site_ids",
    "list_sites_by_ids",
    "update_site",
    "soft_delete_site",
    "purge_site",
    "list_sites_by_group",
    "list_groups",
    "list_site_ids_by_timezones",
    "list_distinct_timezones",
    "list_distinct_types",
    "list_site_ids_with_visits",
    "backfill_created_at",
    "add_alias_url",
    "add_alias_urls",
    "list_alias_urls",
    "clear_alias_urls",
    "list_site_urls",
    "grant_access",
    "list_grants_for_site",
    "list_accessible_site_ids",
    "search_sites",
]
