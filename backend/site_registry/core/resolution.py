"""
URL -> site id resolution.

A site owns its main URL plus any alias URLs, and nothing stops two sites from
listing the same URL, so resolution always yields a set of ids. Each source of
URLs is a lookup callable; resolution is the union of what the lookups return.
Matching is exact-string. Normalizing scheme, case or trailing slashes is the
caller's job.
"""

from typing import Callable, Iterable, Sequence

from sqlalchemy.orm import Session

from site_registry.access.context import Principal
from site_registry.access.scoping import AccessScope, scope_for_principal
from site_registry.core.db import storage_guard
from site_registry.core.errors import InvalidArgument
from site_registry.models.site_urls import SiteUrl
from site_registry.models.sites import Site
from site_registry.schemas.sites import KnownUrl


SiteIdLookup = Callable[[Sequence[str]], Iterable[int]]


def _url_list(urls: Iterable[str]) -> list[str]:
    if urls is None or isinstance(urls, (str, bytes)):
        raise InvalidArgument("URLs must be a collection of strings.")
    values = list(dict.fromkeys(urls))
    for url in values:
        if not isinstance(url, str):
            raise InvalidArgument(f"Invalid URL: {url!r}")
    return values


def union_site_ids(urls: Iterable[str], *lookups: SiteIdLookup) -> list[int]:
    """
    Union the ids each lookup returns for ``urls``, sorted ascending.

    No lookup runs when ``urls`` is empty.
    """
    values = _url_list(urls)
    if not values:
        return []
    site_ids: set[int] = set()
    for lookup in lookups:
        site_ids.update(int(site_id) for site_id in lookup(values))
    return sorted(site_ids)


def main_url_lookup(db: Session, scope: AccessScope | None = None) -> SiteIdLookup:
    def lookup(urls: Sequence[str]) -> list[int]:
        query = db.query(Site.id).filter(Site.deleted.is_(False), Site.main_url.in_(urls))
        if scope is not None:
            query = query.filter(scope.restrict(Site.id))
        return [row[0] for row in query.all()]

    return lookup


def alias_url_lookup(db: Session, scope: AccessScope | None = None) -> SiteIdLookup:
    def lookup(urls: Sequence[str]) -> list[int]:
        query = (
            db.query(SiteUrl.site_id)
            .join(Site, Site.id == SiteUrl.site_id)
            .filter(Site.deleted.is_(False), SiteUrl.url.in_(urls))
        )
        if scope is not None:
            query = query.filter(scope.restrict(SiteUrl.site_id))
        return [row[0] for row in query.all()]

    return lookup


@storage_guard
def resolve_site_ids(db: Session, urls: Iterable[str]) -> list[int]:
    return union_site_ids(urls, main_url_lookup(db), alias_url_lookup(db))


@storage_guard
def resolve_site_ids_in_scope(db: Session, scope: AccessScope, urls: Iterable[str]) -> list[int]:
    if scope is None:
        raise InvalidArgument("Access scope is required.")
    return union_site_ids(urls, main_url_lookup(db, scope), alias_url_lookup(db, scope))


def resolve_site_ids_for_principal(db: Session, principal: Principal, urls: Iterable[str]) -> list[int]:
    return resolve_site_ids_in_scope(db, scope_for_principal(principal), urls)


@storage_guard
def list_all_known_urls(db: Session) -> list[KnownUrl]:
    """
    Raw extract of every (site_id, url) pair for live sites: main URLs first,
    then aliases. Duplicates across sites are kept.
    """
    main_rows = (
        db.query(Site.id, Site.main_url)
        .filter(Site.deleted.is_(False))
        .order_by(Site.id.asc())
        .all()
    )
    alias_rows = (
        db.query(SiteUrl.site_id, SiteUrl.url)
        .join(Site, Site.id == SiteUrl.site_id)
        .filter(Site.deleted.is_(False))
        .order_by(SiteUrl.site_id.asc(), SiteUrl.id.asc())
        .all()
    )
    return [KnownUrl(site_id=site_id, url=url) for site_id, url in [*main_rows, *alias_rows]]
