from typing import Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from site_registry.core.db import storage_guard
from site_registry.core.errors import InvalidArgument
from site_registry.core.utils import MAX_SITE_ID, coerce_limit, coerce_site_ids, escape_like
from site_registry.models.sites import Site


_LIKE_ESCAPE = "\\"


def _id_from_pattern(pattern: str) -> int | None:
    if not (pattern.isascii() and pattern.isdigit()):
        return None
    site_id = int(pattern)
    if not 0 < site_id <= MAX_SITE_ID:
        return None
    return site_id


@storage_guard
def search_sites(
    db: Session,
    candidate_ids: Iterable[int],
    pattern: str,
    limit: int | None = None,
) -> list[Site]:
    """
    Find live sites among ``candidate_ids`` whose name, main URL or group
    contains ``pattern`` (case-insensitive). A numeric pattern also matches the
    site id exactly, in addition to the text predicates.

    An empty candidate set is rejected rather than treated as "no filter".
    """
    ids = coerce_site_ids(candidate_ids)
    if not ids:
        raise InvalidArgument("Candidate site ids must not be empty.")
    if not isinstance(pattern, str):
        raise InvalidArgument("Search pattern must be a string.")
    limit = coerce_limit(limit)

    escaped = escape_like(pattern, _LIKE_ESCAPE)
    contains = f"%{escaped}%"
    predicates = [
        Site.name.ilike(contains, escape=_LIKE_ESCAPE),
        Site.main_url.ilike(contains, escape=_LIKE_ESCAPE),
        # Tolerates patterns typed without the scheme.
        Site.main_url.ilike(f"http%{escaped}%", escape=_LIKE_ESCAPE),
        Site.group.ilike(contains, escape=_LIKE_ESCAPE),
    ]
    site_id = _id_from_pattern(pattern)
    if site_id is not None:
        predicates.append(Site.id == site_id)

    query = (
        db.query(Site)
        .filter(Site.deleted.is_(False), Site.id.in_(ids), or_(*predicates))
        .order_by(Site.id.asc())
    )
    if limit is not None:
        query = query.limit(limit)
    return query.all()
