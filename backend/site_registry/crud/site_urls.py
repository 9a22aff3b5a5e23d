from typing import Iterable

from sqlalchemy.orm import Session

from site_registry.core.db import storage_guard
from site_registry.core.errors import InvalidArgument
from site_registry.core.logging import logger
from site_registry.models.site_urls import SiteUrl
from site_registry.models.sites import Site


def _check_url(url) -> str:
    if not isinstance(url, str) or not url.strip():
        raise InvalidArgument("Alias URL must be a non-empty string.")
    return url


@storage_guard
def add_alias_url(db: Session, site_id: int, url: str) -> SiteUrl:
    # The caller guarantees site_id is valid; no lookup against sites here.
    alias = SiteUrl(site_id=int(site_id), url=_check_url(url))
    db.add(alias)
    db.commit()
    return alias


@storage_guard
def add_alias_urls(db: Session, site_id: int, urls: Iterable[str], *, commit: bool = True) -> int:
    if urls is None or isinstance(urls, (str, bytes)):
        raise InvalidArgument("Alias URLs must be a collection of strings.")
    checked = [_check_url(url) for url in urls]
    db.add_all(SiteUrl(site_id=int(site_id), url=url) for url in checked)
    if commit:
        db.commit()
    return len(checked)


@storage_guard
def list_alias_urls(db: Session, site_id: int) -> list[str]:
    rows = db.query(SiteUrl.url).filter(SiteUrl.site_id == site_id).order_by(SiteUrl.id.asc()).all()
    return [row[0] for row in rows]


@storage_guard
def clear_alias_urls(db: Session, site_id: int, *, commit: bool = True) -> int:
    removed = db.query(SiteUrl).filter(SiteUrl.site_id == site_id).delete(synchronize_session=False)
    if commit:
        db.commit()
        logger.info("site.aliases_cleared", extra={"site_id": site_id, "aliases_removed": removed})
    return removed


@storage_guard
def list_site_urls(db: Session, site_id: int) -> list[str]:
    """Main URL first, then aliases. A missing or deleted site yields only its aliases."""
    aliases = list_alias_urls(db, site_id)
    main_url = (
        db.query(Site.main_url)
        .filter(Site.id == site_id, Site.deleted.is_(False))
        .scalar()
    )
    if main_url is None:
        return aliases
    return [main_url, *aliases]
