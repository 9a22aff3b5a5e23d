from sqlalchemy.orm import Session

from site_registry.core.db import storage_guard
from site_registry.core.errors import InvalidArgument
from site_registry.models.enums import AccessLevelEnum
from site_registry.models.site_access import SiteAccess
from site_registry.models.sites import Site


def _normalize_access(access: AccessLevelEnum | str) -> AccessLevelEnum:
    if isinstance(access, AccessLevelEnum):
        return access
    try:
        return AccessLevelEnum(access)
    except ValueError as exc:
        raise InvalidArgument("Invalid access level.") from exc


@storage_guard
def grant_access(
    db: Session,
    login: str,
    site_id: int,
    access: AccessLevelEnum | str = AccessLevelEnum.VIEW,
) -> SiteAccess:
    normalized = _normalize_access(access)
    grant = (
        db.query(SiteAccess)
        .filter(SiteAccess.login == login, SiteAccess.site_id == site_id)
        .first()
    )
    if grant:
        grant.access = normalized
    else:
        grant = SiteAccess(login=login, site_id=site_id, access=normalized)
        db.add(grant)
    db.commit()
    db.refresh(grant)
    return grant


@storage_guard
def list_grants_for_site(db: Session, site_id: int) -> list[SiteAccess]:
    return db.query(SiteAccess).filter(SiteAccess.site_id == site_id).order_by(SiteAccess.id).all()


@storage_guard
def list_accessible_site_ids(db: Session, login: str) -> list[int]:
    rows = (
        db.query(SiteAccess.site_id)
        .join(Site, Site.id == SiteAccess.site_id)
        .filter(SiteAccess.login == login, Site.deleted.is_(False))
        .order_by(SiteAccess.site_id.asc())
        .all()
    )
    return [row[0] for row in rows]
