from __future__ import annotations

import logging
from typing import Iterable, Optional

from backend.internal_core.config import ContractsConfig, load_config
from backend.internal_core.contracts import GriDataItemDto, GriDataSearchCriteria, PageResponse
from backend.pagination import paginate, parse_sort, sort_items

logger = logging.getLogger(__name__)


def _text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _contains_casefold(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.casefold()


def matches_criteria(item: GriDataItemDto, criteria: GriDataSearchCriteria) -> bool:
    """True when ``item`` satisfies every criterion that is present.

    Blank strings count as absent. ``sort`` never filters.
    """
    exact = (
        (criteria.category, item.category),
        (criteria.standard_code, item.standard_code),
        (criteria.disclosure_code, item.disclosure_code),
        (criteria.verification_status, item.verification_status),
    )
    for wanted, actual in exact:
        wanted = _text(wanted)
        if wanted is not None and actual != wanted:
            return False

    if criteria.company_id is not None and item.company_id != criteria.company_id:
        return False

    # Period bounds: the item's period must lie inside the requested window.
    if criteria.reporting_period_start is not None:
        if item.reporting_period_start is None or item.reporting_period_start < criteria.reporting_period_start:
            return False
    if criteria.reporting_period_end is not None:
        if item.reporting_period_end is None or item.reporting_period_end > criteria.reporting_period_end:
            return False

    keyword = _text(criteria.keyword)
    if keyword is not None:
        needle = keyword.casefold()
        if not (
            _contains_casefold(item.disclosure_title, needle)
            or _contains_casefold(item.description, needle)
        ):
            return False

    return True


def search_gri_data(
    items: Iterable[GriDataItemDto],
    criteria: Optional[GriDataSearchCriteria] = None,
    page: int = 0,
    size: Optional[int] = None,
    *,
    config: Optional[ContractsConfig] = None,
) -> PageResponse[GriDataItemDto]:
    """Filter, sort by ``criteria.sort`` and page an in-memory collection."""
    cfg = config or load_config()
    criteria = criteria or GriDataSearchCriteria()
    page_size = cfg.clamp_page_size(size)
    directive = parse_sort(criteria.sort, cfg.ESG_DEFAULT_SORT)

    matched = [item for item in items if matches_criteria(item, criteria)]
    ordered = sort_items(matched, directive, model_cls=GriDataItemDto)
    logger.debug(
        "gri_search matched=%s page=%s size=%s sort=%s desc=%s",
        len(ordered),
        page,
        page_size,
        directive.property,
        directive.descending,
    )
    return paginate(ordered, page, page_size)
