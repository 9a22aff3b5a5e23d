from __future__ import annotations

import argparse
import logging
from datetime import date, datetime

from site_registry.core.db import SessionLocal
from site_registry.core.directory import backfill_created_at


logger = logging.getLogger(__name__)


def _parse_floor(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    try:
        parsed = date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {value!r}") from exc
    return datetime(parsed.year, parsed.month, parsed.day)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lower created_at to a floor date for sites recorded after it."
    )
    parser.add_argument(
        "--site-id",
        dest="site_ids",
        type=int,
        action="append",
        required=True,
        help="Site to correct. Repeat for several sites.",
    )
    parser.add_argument("--floor", type=_parse_floor, required=True, help="ISO date or datetime.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    with SessionLocal() as db:
        updated = backfill_created_at(db, args.site_ids, args.floor)
    logger.info("Backfilled created_at for %s site(s)", updated)
    return updated


if __name__ == "__main__":
    main()
