from sqlalchemy import Column, DateTime, Index, Integer

from site_registry.core.db import Base


class LogVisit(Base):
    """Visit log rows, owned by the tracker. Only queried for existence in a window."""

    __tablename__ = "log_visit"
    __table_args__ = (
        Index("ix_log_visit_site_last_action", "site_id", "visit_last_action_time"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(Integer, nullable=False)
    visit_last_action_time = Column(DateTime, nullable=False)
