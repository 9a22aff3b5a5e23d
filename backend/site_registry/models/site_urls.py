from sqlalchemy import Column, ForeignKey, Index, Integer, String

from site_registry.core.db import Base


class SiteUrl(Base):
    """Alias URL for a site. (site_id, url) is not unique; callers deduplicate."""

    __tablename__ = "site_urls"
    __table_args__ = (
        Index("ix_site_urls_site_id", "site_id"),
        Index("ix_site_urls_url", "url"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(Integer, ForeignKey("sites.id", ondelete="CASCADE"), nullable=False)
    url = Column(String, nullable=False)

