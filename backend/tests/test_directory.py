import os
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from site_registry.core.db import Base
from site_registry.core.directory import (
    backfill_created_at,
    group_names,
    site_timezones,
    site_types,
    sites_in_group,
    sites_in_timezones,
    sites_with_visits,
)
from site_registry.core.errors import InvalidArgument
from site_registry.crud.sites import (
    get_site,
    list_site_ids_by_timezones,
    list_site_ids_with_visits,
    soft_delete_site,
)
from tests.factories import make_site, make_site_row, make_visit


@pytest.fixture
def db_session(tmp_path):
    db_url = f"sqlite:///{tmp_path}/directory_test.db"
    engine = create_engine(db_url, future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    with TestingSessionLocal() as session:
        yield session


def test_group_names_keep_the_empty_bucket_once(db_session):
    make_site(db_session, group="news")
    make_site(db_session, group="")
    make_site(db_session, group="news")
    assert sorted(group_names(db_session)) == ["", "news"]


def test_group_names_fold_null_into_empty_bucket(db_session):
    make_site(db_session, group="")
    make_site_row(db_session, site_id=50, group=None)
    assert group_names(db_session) == [""]


def test_group_names_skip_deleted_sites(db_session):
    make_site(db_session, group="live")
    gone = make_site(db_session, group="archived")
    soft_delete_site(db_session, gone)
    assert group_names(db_session) == ["live"]


def test_sites_in_group(db_session):
    news_a = make_site(db_session, group="news")
    make_site(db_session, group="shop")
    news_b = make_site(db_session, group="news")
    ungrouped = make_site(db_session, group="")
    gone = make_site(db_session, group="news")
    soft_delete_site(db_session, gone)
    assert [site.id for site in sites_in_group(db_session, "news")] == [news_a, news_b]
    assert [site.id for site in sites_in_group(db_session, "")] == [ungrouped]


def test_sites_in_timezones(db_session):
    paris = make_site(db_session, timezone="Europe/Paris")
    utc = make_site(db_session, timezone="UTC")
    make_site(db_session, timezone="America/New_York")
    gone = make_site(db_session, timezone="UTC")
    soft_delete_site(db_session, gone)
    assert list_site_ids_by_timezones(db_session, ["UTC", "Europe/Paris"]) == [paris, utc]
    assert [site.id for site in sites_in_timezones(db_session, ["UTC"])] == [utc]
    assert list_site_ids_by_timezones(db_session, []) == []


def test_timezones_must_be_a_collection(db_session):
    with pytest.raises(InvalidArgument):
        list_site_ids_by_timezones(db_session, "UTC")


def test_distinct_timezones_and_types(db_session):
    make_site(db_session, timezone="UTC", type="website")
    make_site(db_session, timezone="UTC+5", type="intranet")
    make_site(db_session, timezone="UTC", type="website")
    gone = make_site(db_session, timezone="Asia/Tokyo", type="mobileapp")
    soft_delete_site(db_session, gone)
    assert site_timezones(db_session) == ["UTC", "UTC+5"]
    # Types are opaque strings; nothing checks them against a fixed list.
    assert site_types(db_session) == ["intranet", "website"]


def test_sites_with_visits_window_is_half_open(db_session):
    t0 = datetime(2024, 1, 1, 0, 0, 0)
    t1 = datetime(2024, 1, 2, 0, 0, 0)
    at_start = make_site(db_session)
    at_end = make_site(db_session)
    inside = make_site(db_session)
    after = make_site(db_session)
    no_visits = make_site(db_session)
    make_visit(db_session, site_id=at_start, at=t0)
    make_visit(db_session, site_id=at_end, at=t1)
    make_visit(db_session, site_id=inside, at=datetime(2024, 1, 1, 12, 0, 0))
    make_visit(db_session, site_id=inside, at=datetime(2024, 1, 1, 13, 0, 0))
    make_visit(db_session, site_id=after, at=datetime(2024, 1, 2, 0, 0, 1))
    result = list_site_ids_with_visits(db_session, t0, t1)
    assert result == [at_end, inside]
    assert at_start not in result
    assert no_visits not in result
    assert [site.id for site in sites_with_visits(db_session, t0, t1)] == [at_end, inside]


def test_sites_with_visits_skips_deleted_sites(db_session):
    site_id = make_site(db_session)
    make_visit(db_session, site_id=site_id, at=datetime(2024, 1, 1, 12, 0, 0))
    soft_delete_site(db_session, site_id)
    assert list_site_ids_with_visits(db_session, datetime(2024, 1, 1), datetime(2024, 1, 2)) == []


def test_backfill_created_at_only_moves_down_and_is_idempotent(db_session):
    floor = datetime(2020, 1, 1)
    later = make_site(db_session, created_at=datetime(2021, 6, 1))
    earlier = make_site(db_session, created_at=datetime(2019, 6, 1))
    untouched = make_site(db_session, created_at=datetime(2022, 1, 1))
    assert backfill_created_at(db_session, [later, earlier], floor) == 1
    assert get_site(db_session, later).created_at == floor
    assert get_site(db_session, earlier).created_at == datetime(2019, 6, 1)
    assert get_site(db_session, untouched).created_at == datetime(2022, 1, 1)
    assert backfill_created_at(db_session, [later, earlier], floor) == 0


def test_backfill_created_at_skips_deleted_sites_and_accepts_dates(db_session):
    site_id = make_site(db_session, created_at=datetime(2021, 6, 1))
    gone = make_site(db_session, created_at=datetime(2021, 6, 1))
    soft_delete_site(db_session, gone)
    assert backfill_created_at(db_session, [site_id, gone], date(2020, 1, 1)) == 1
    assert get_site(db_session, site_id).created_at == datetime(2020, 1, 1)


def test_backfill_created_at_empty_ids_is_a_no_op(db_session):
    assert backfill_created_at(db_session, [], datetime(2020, 1, 1)) == 0
