from enum import Enum

# Stored as strings (native enums disabled for easier evolution).


class SiteLifecycleEnum(str, Enum):
    # Purged sites no longer have a row; the state exists to name the transition.
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"
    PURGED = "purged"


class AccessLevelEnum(str, Enum):
    VIEW = "view"
    WRITE = "write"
    ADMIN = "admin"
