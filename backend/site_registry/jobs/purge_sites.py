from __future__ import annotations

import argparse
import logging

from sqlalchemy.orm import Session

from site_registry.core.db import SessionLocal
from site_registry.core.errors import InvariantViolation, SiteNotFound
from site_registry.crud.sites import purge_site


logger = logging.getLogger(__name__)


def purge_sites(db: Session, site_ids: list[int]) -> list[int]:
    """Purge each soft-deleted site; active or unknown ids are logged and skipped."""
    purged: list[int] = []
    for site_id in site_ids:
        try:
            purge_site(db, site_id)
        except (InvariantViolation, SiteNotFound) as exc:
            logger.warning("Skipping purge of site %s: %s", site_id, exc)
            continue
        purged.append(site_id)
    return purged


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Permanently remove soft-deleted sites.")
    parser.add_argument(
        "--site-id",
        dest="site_ids",
        type=int,
        action="append",
        required=True,
        help="Site to purge. Repeat for several sites.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> list[int]:
    args = _parse_args(argv)
    with SessionLocal() as db:
        purged = purge_sites(db, args.site_ids)
    logger.info("Purged %s of %s site(s)", len(purged), len(args.site_ids))
    return purged


if __name__ == "__main__":
    main()
