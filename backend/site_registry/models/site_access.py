from sqlalchemy import Column, Enum, Index, Integer, String, UniqueConstraint

from site_registry.core.db import Base
from site_registry.models.enums import AccessLevelEnum


class SiteAccess(Base):
    """Access grant rows. Written by access control; read and purged here."""

    __tablename__ = "site_access"
    __table_args__ = (
        UniqueConstraint("login", "site_id", name="uq_site_access_login_site"),
        Index("ix_site_access_login", "login"),
        Index("ix_site_access_site_id", "site_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    login = Column(String, nullable=False)
    # No FK: grants are owned by another subsystem and cleaned up on purge.
    site_id = Column(Integer, nullable=False)
    access = Column(
        Enum(
            AccessLevelEnum,
            name="site_access_level_enum",
            native_enum=False,
            validate_strings=True,
        ),
        nullable=False,
        default=AccessLevelEnum.VIEW,
    )
