from datetime import date, datetime
from typing import Iterable, Mapping

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from site_registry.core.db import storage_guard
from site_registry.core.errors import InvalidArgument, SiteNotFound, ValidationError
from site_registry.core.lifecycle import assert_transition, lifecycle_of
from site_registry.core.logging import logger
from site_registry.core.time import as_naive_utc
from site_registry.core.utils import coerce_limit, coerce_site_ids
from site_registry.models.enums import SiteLifecycleEnum
from site_registry.models.log_visits import LogVisit
from site_registry.models.site_access import SiteAccess
from site_registry.models.site_urls import SiteUrl
from site_registry.models.sites import Site
from site_registry.schemas.sites import SiteCreate, SiteUpdate


def _schema_error(exc: SchemaValidationError) -> ValidationError:
    fields = sorted({".".join(str(part) for part in err["loc"]) or "site" for err in exc.errors()})
    return ValidationError(f"Invalid site fields: {', '.join(fields)}")


def _validate_create(site: SiteCreate | Mapping) -> SiteCreate:
    if isinstance(site, SiteCreate):
        return site
    if not isinstance(site, Mapping):
        raise ValidationError("Site payload must be a mapping.")
    try:
        return SiteCreate.model_validate(dict(site))
    except SchemaValidationError as exc:
        raise _schema_error(exc) from exc


def _validate_update(fields: SiteUpdate | Mapping) -> SiteUpdate:
    if isinstance(fields, SiteUpdate):
        return fields
    if not isinstance(fields, Mapping):
        raise ValidationError("Site fields must be a mapping.")
    try:
        return SiteUpdate.model_validate(dict(fields))
    except SchemaValidationError as exc:
        raise _schema_error(exc) from exc


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return as_naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise InvalidArgument("Expected a date or datetime.")


def _site_query(db: Session, *, include_deleted: bool = False):
    query = db.query(Site)
    if not include_deleted:
        query = query.filter(Site.deleted.is_(False))
    return query


def _string_list(values: Iterable[str], what: str) -> list[str]:
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidArgument(f"{what} must be a collection of strings.")
    return list(dict.fromkeys(values))


@storage_guard
def create_site(db: Session, site: SiteCreate | Mapping, *, commit: bool = True) -> int:
    payload = _validate_create(site)
    data = payload.model_dump(exclude_none=True)
    if "created_at" in data:
        data["created_at"] = as_naive_utc(data["created_at"])
    record = Site(**data, deleted=False)
    db.add(record)
    if not commit:
        db.flush()
        return record.id
    db.commit()
    db.refresh(record)
    logger.info("site.created", extra={"site_id": record.id})
    return record.id


@storage_guard
def get_site(db: Session, site_id: int) -> Site:
    site = _site_query(db).filter(Site.id == site_id).first()
    if not site:
        raise SiteNotFound(f"Site {site_id} not found")
    return site


@storage_guard
def site_exists(db: Session, site_id: int, *, include_deleted: bool = False) -> bool:
    query = _site_query(db, include_deleted=include_deleted).filter(Site.id == site_id)
    return bool(db.query(query.exists()).scalar())


@storage_guard
def list_sites(db: Session) -> list[Site]:
    return _site_query(db).order_by(Site.id.asc()).all()


@storage_guard
def list_site_ids(db: Session) -> list[int]:
    return [row[0] for row in db.query(Site.id).filter(Site.deleted.is_(False)).order_by(Site.id.asc())]


@storage_guard
def list_sites_by_ids(db: Session, site_ids: Iterable[int], limit: int | None = None) -> list[Site]:
    ids = coerce_site_ids(site_ids)
    limit = coerce_limit(limit)
    if not ids:
        return []
    query = _site_query(db).filter(Site.id.in_(ids)).order_by(Site.id.asc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


@storage_guard
def update_site(db: Session, site_id: int, fields: SiteUpdate | Mapping) -> Site:
    payload = _validate_update(fields)
    changes = payload.model_dump(exclude_unset=True)
    site = get_site(db, site_id)
    if not changes:
        return site
    if "group" in changes and changes["group"] is None:
        changes["group"] = ""
    if "created_at" in changes:
        changes["created_at"] = as_naive_utc(changes["created_at"])
    for key, value in changes.items():
        setattr(site, key, value)
    db.commit()
    db.refresh(site)
    logger.info("site.updated", extra={"site_id": site.id, "fields": sorted(changes)})
    return site


@storage_guard
def soft_delete_site(db: Session, site_id: int) -> None:
    site = _site_query(db, include_deleted=True).filter(Site.id == site_id).first()
    if not site:
        raise SiteNotFound(f"Site {site_id} not found")
    assert_transition(lifecycle_of(site), SiteLifecycleEnum.SOFT_DELETED)
    if site.deleted:
        return
    site.deleted = True
    db.commit()
    logger.info("site.soft_deleted", extra={"site_id": site_id})


@storage_guard
def purge_site(db: Session, site_id: int) -> None:
    """
    Permanently remove a soft-deleted site with its alias URLs and access grants.

    The three deletes share one transaction; any storage error rolls all of
    them back.
    """
    site = (
        _site_query(db, include_deleted=True)
        .filter(Site.id == site_id)
        .with_for_update()
        .first()
    )
    if not site:
        raise SiteNotFound(f"Site {site_id} not found")
    assert_transition(lifecycle_of(site), SiteLifecycleEnum.PURGED)

    aliases_removed = (
        db.query(SiteUrl).filter(SiteUrl.site_id == site_id).delete(synchronize_session=False)
    )
    grants_removed = (
        db.query(SiteAccess).filter(SiteAccess.site_id == site_id).delete(synchronize_session=False)
    )
    db.delete(site)
    db.commit()
    logger.info(
        "site.purged",
        extra={
            "site_id": site_id,
            "aliases_removed": aliases_removed,
            "grants_removed": grants_removed,
        },
    )


@storage_guard
def list_sites_by_group(db: Session, group: str | None) -> list[Site]:
    query = _site_query(db)
    if group is None or group == "":
        query = query.filter((Site.group == "") | Site.group.is_(None))
    else:
        query = query.filter(Site.group == group)
    return query.order_by(Site.id.asc()).all()


@storage_guard
def list_groups(db: Session) -> list[str]:
    rows = (
        db.query(Site.group)
        .filter(Site.deleted.is_(False))
        .distinct()
        .order_by(Site.group.asc())
        .all()
    )
    # A null group and an empty group are the same "no group" bucket.
    return list(dict.fromkeys("" if row[0] is None else row[0] for row in rows))


@storage_guard
def list_site_ids_by_timezones(db: Session, timezones: Iterable[str]) -> list[int]:
    values = _string_list(timezones, "Timezones")
    if not values:
        return []
    rows = (
        db.query(Site.id)
        .filter(Site.deleted.is_(False), Site.timezone.in_(values))
        .order_by(Site.id.asc())
        .all()
    )
    return [row[0] for row in rows]


@storage_guard
def list_distinct_timezones(db: Session) -> list[str]:
    rows = (
        db.query(Site.timezone)
        .filter(Site.deleted.is_(False))
        .distinct()
        .order_by(Site.timezone.asc())
        .all()
    )
    return [row[0] for row in rows]


@storage_guard
def list_distinct_types(db: Session) -> list[str]:
    rows = (
        db.query(Site.type)
        .filter(Site.deleted.is_(False))
        .distinct()
        .order_by(Site.type.asc())
        .all()
    )
    return [row[0] for row in rows]


@storage_guard
def list_site_ids_with_visits(db: Session, start: datetime, end: datetime) -> list[int]:
    """Ids of live sites with a visit whose last action falls in (start, end]."""
    if start is None or end is None:
        raise InvalidArgument("Both start and end are required.")
    start, end = _as_datetime(start), _as_datetime(end)
    has_visit = (
        select(LogVisit.id)
        .where(
            LogVisit.site_id == Site.id,
            LogVisit.visit_last_action_time > start,
            LogVisit.visit_last_action_time <= end,
        )
        .exists()
    )
    rows = (
        db.query(Site.id)
        .filter(Site.deleted.is_(False), has_visit)
        .order_by(Site.id.asc())
        .all()
    )
    return [row[0] for row in rows]


@storage_guard
def backfill_created_at(db: Session, site_ids: Iterable[int], floor: date | datetime) -> int:
    ids = coerce_site_ids(site_ids)
    if not ids:
        return 0
    floor_value = _as_datetime(floor)
    updated = (
        db.query(Site)
        .filter(
            Site.deleted.is_(False),
            Site.id.in_(ids),
            Site.created_at > floor_value,
        )
        .update({Site.created_at: floor_value}, synchronize_session=False)
    )
    db.commit()
    logger.info(
        "site.created_at_backfilled",
        extra={"site_ids": ids, "floor": floor_value.isoformat(), "updated": updated},
    )
    return updated
