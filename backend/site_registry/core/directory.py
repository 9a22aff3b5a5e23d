"""
Administrative listing views composed over the site and alias stores.
"""

from datetime import date, datetime
from typing import Iterable, Mapping

from sqlalchemy.orm import Session

from site_registry.core.db import storage_guard
from site_registry.core.errors import SiteRegistryError
from site_registry.core.logging import logger
from site_registry.crud import site_urls as site_url_store
from site_registry.crud import sites as site_store
from site_registry.models.sites import Site
from site_registry.schemas.sites import SiteCreate


@storage_guard
def register_site(db: Session, site: SiteCreate | Mapping, alias_urls: Iterable[str] = ()) -> int:
    """Create a site and attach its alias URLs in one commit."""
    alias_urls = list(alias_urls)
    try:
        site_id = site_store.create_site(db, site, commit=False)
        site_url_store.add_alias_urls(db, site_id, alias_urls, commit=False)
    except SiteRegistryError:
        db.rollback()
        raise
    db.commit()
    logger.info("site.registered", extra={"site_id": site_id, "aliases": len(alias_urls)})
    return site_id


def sites_in_group(db: Session, group: str | None) -> list[Site]:
    return site_store.list_sites_by_group(db, group)


def group_names(db: Session) -> list[str]:
    return site_store.list_groups(db)


def sites_in_timezones(db: Session, timezones: Iterable[str]) -> list[Site]:
    return site_store.list_sites_by_ids(db, site_store.list_site_ids_by_timezones(db, timezones))


def sites_with_visits(db: Session, start: datetime, end: datetime) -> list[Site]:
    return site_store.list_sites_by_ids(db, site_store.list_site_ids_with_visits(db, start, end))


def site_timezones(db: Session) -> list[str]:
    return site_store.list_distinct_timezones(db)


def site_types(db: Session) -> list[str]:
    return site_store.list_distinct_types(db)


@storage_guard
def replace_alias_urls(db: Session, site_id: int, urls: Iterable[str]) -> list[str]:
    """Swap a live site's alias URLs for ``urls`` in one commit."""
    site_store.get_site(db, site_id)
    urls = list(urls)
    try:
        site_url_store.clear_alias_urls(db, site_id, commit=False)
        site_url_store.add_alias_urls(db, site_id, urls, commit=False)
    except SiteRegistryError:
        db.rollback()
        raise
    db.commit()
    logger.info("site.aliases_replaced", extra={"site_id": site_id, "aliases": len(urls)})
    return site_url_store.list_alias_urls(db, site_id)


def backfill_created_at(db: Session, site_ids: Iterable[int], floor: date | datetime) -> int:
    """
    Move ``created_at`` down to ``floor`` for live sites currently recorded after it.

    Never moves a value up, so repeating the call with the same floor changes nothing.
    """
    return site_store.backfill_created_at(db, site_ids, floor)
