"""
Site lifecycle: ACTIVE -> SOFT_DELETED -> PURGED.

Store operations check transitions here before touching rows, so a purge can
never skip the soft-deleted state.
"""

from site_registry.core.errors import InvariantViolation
from site_registry.models.enums import SiteLifecycleEnum


_ALLOWED_TRANSITIONS = {
    SiteLifecycleEnum.ACTIVE: {SiteLifecycleEnum.SOFT_DELETED},
    # Soft delete is idempotent.
    SiteLifecycleEnum.SOFT_DELETED: {SiteLifecycleEnum.SOFT_DELETED, SiteLifecycleEnum.PURGED},
    SiteLifecycleEnum.PURGED: set(),
}


def lifecycle_of(site) -> SiteLifecycleEnum:
    if site is None:
        return SiteLifecycleEnum.PURGED
    return SiteLifecycleEnum.SOFT_DELETED if site.deleted else SiteLifecycleEnum.ACTIVE


def can_transition(current: SiteLifecycleEnum, target: SiteLifecycleEnum) -> bool:
    return target in _ALLOWED_TRANSITIONS[current]


def assert_transition(current: SiteLifecycleEnum, target: SiteLifecycleEnum) -> None:
    if can_transition(current, target):
        return
    if target == SiteLifecycleEnum.PURGED and current == SiteLifecycleEnum.ACTIVE:
        raise InvariantViolation("Only soft-deleted sites can be purged.")
    raise InvariantViolation(f"Site cannot move from {current.value} to {target.value}.")
