from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, false

from site_registry.core.config import settings
from site_registry.core.db import Base
from site_registry.core.time import utcnow


class Site(Base):
    __tablename__ = "sites"
    __table_args__ = (
        Index("ix_sites_deleted_main_url", "deleted", "main_url"),
        Index("ix_sites_group", "group"),
        Index("ix_sites_timezone", "timezone"),
        # Ids are never reused, even after a purge.
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    group = Column("group", String, nullable=True, default="")
    main_url = Column(String, nullable=False)
    timezone = Column(String, nullable=False, default=lambda: settings.DEFAULT_SITE_TIMEZONE)
    type = Column(String, nullable=False, default=lambda: settings.DEFAULT_SITE_TYPE)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    deleted = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self) -> str:
        return f"<Site id={self.id} main_url={self.main_url!r} deleted={self.deleted}>"
