"""
Deterministic seed script for dev/demo environments.
"""

from __future__ import annotations

import os
import sys
from datetime import timedelta

from site_registry.core.db import SessionLocal, Base, engine
from site_registry.core.directory import register_site
from site_registry.core.time import utcnow
from site_registry.crud.site_access import grant_access
from site_registry.crud.sites import soft_delete_site
from site_registry.models.log_visits import LogVisit
from site_registry.models.sites import Site


def ensure_not_production():
    env = os.getenv("ENV", "").lower()
    allow_prod = os.getenv("ALLOW_SEED_PROD", "0").lower() in {"1", "true", "yes"}
    if env == "production" and not allow_prod:
        print("Refusing to seed in production. Set ALLOW_SEED_PROD=1 to override.", file=sys.stderr)
        sys.exit(1)


def get_or_create_site(db, name: str, main_url: str, *, group: str = "", alias_urls=(), **fields) -> int:
    existing = db.query(Site.id).filter(Site.main_url == main_url).first()
    if existing:
        return existing[0]
    return register_site(
        db,
        {"name": name, "main_url": main_url, "group": group, **fields},
        alias_urls,
    )


def seed():
    ensure_not_production()
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        # Sites
        acme = get_or_create_site(
            db,
            "Acme Store",
            "http://acme-store.com",
            group="retail",
            alias_urls=["http://www.acme-store.com", "https://acme-store.com"],
        )
        news = get_or_create_site(
            db,
            "Daily News",
            "http://daily-news.example.com",
            group="news",
            timezone="Europe/Paris",
        )
        intranet = get_or_create_site(
            db,
            "Intranet",
            "http://intranet.local",
            type="intranet",
            timezone="UTC+2",
        )
        retired = get_or_create_site(db, "Retired Blog", "http://old-blog.example.com", group="news")

        # Access grants
        grant_access(db, "alice", acme, "admin")
        grant_access(db, "alice", news, "view")
        grant_access(db, "bob", intranet, "write")

        # Visits over the last day (simple demo data)
        now = utcnow()
        for site_id, hours_ago in ((acme, 1), (acme, 5), (news, 20)):
            db.add(LogVisit(site_id=site_id, visit_last_action_time=now - timedelta(hours=hours_ago)))
        db.commit()

        soft_delete_site(db, retired)
    print("Seed complete.")


if __name__ == "__main__":
    seed()
