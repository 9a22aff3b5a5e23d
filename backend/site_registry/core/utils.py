from typing import Iterable

from site_registry.core.errors import InvalidArgument


# Largest value a BIGINT primary key can hold.
MAX_SITE_ID = 2**63 - 1


def coerce_site_ids(site_ids: Iterable) -> list[int]:
    """
    Turn caller-supplied ids into a de-duplicated list of ints, keeping order.

    Raises InvalidArgument for anything that is not an integer id, so ids can be
    bound as parameters without reaching the query as raw text.
    """
    if site_ids is None:
        raise InvalidArgument("Site ids are required.")
    if isinstance(site_ids, (str, bytes)):
        raise InvalidArgument("Site ids must be a collection of integers.")
    seen: set[int] = set()
    coerced: list[int] = []
    for value in site_ids:
        if isinstance(value, bool):
            raise InvalidArgument(f"Invalid site id: {value!r}")
        try:
            site_id = int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Invalid site id: {value!r}") from exc
        if abs(site_id) > MAX_SITE_ID:
            raise InvalidArgument(f"Site id out of range: {value!r}")
        if site_id in seen:
            continue
        seen.add(site_id)
        coerced.append(site_id)
    return coerced


def coerce_limit(limit) -> int | None:
    """``None`` and ``0`` both mean "no limit"; a positive int truncates."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgument("Limit must be an integer.")
    if limit < 0:
        raise InvalidArgument("Limit must not be negative.")
    return limit or None


def escape_like(value: str, escape: str = "\\") -> str:
    return (
        value.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )
