"""Turn raw links into a deduplicated, per-site work plan."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .classification import classify_link
from .context import LinkPlan, ParsedLink, RecordKey, SitePlan
from .errors import NoMatchingLinksError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from pubimport.domain.model import Site

log = getLogger(__name__)

type LinkClassifier = Callable[[str, Sequence[Site]], ParsedLink]


def plan_links(
    raw_links: Iterable[str],
    sites: Sequence[Site],
    *,
    classify: LinkClassifier = classify_link,
) -> LinkPlan:
    """Classify ``raw_links`` and build the plan for the fetch stage.

    Unique links keep the order of their first occurrence across all sites;
    site plans keep the order in which each site first appeared.
    """

    plan = LinkPlan()
    seen_keys: set[RecordKey] = set()
    unmatched_lookup: set[str] = set()
    plans_by_site: dict[str, SitePlan] = {}

    for url in raw_links:
        link = classify(url, sites)
        key = link.key
        if link.site is None or link.identifier is None or key is None:
            if url not in unmatched_lookup:
                unmatched_lookup.add(url)
                plan.unmatched_links.append(url)
            continue

        plan.valid_link_count += 1
        if key not in seen_keys:
            seen_keys.add(key)
            plan.unique_links.append(link)

        site_plan = plans_by_site.get(link.site.id)
        if site_plan is None:
            site_plan = SitePlan(site=link.site)
            plans_by_site[link.site.id] = site_plan
            plan.site_plans.append(site_plan)
        site_plan.record(link.identifier, link.original_url)

    if not plan.unique_links:
        raise NoMatchingLinksError

    log.info(
        "Planned %d unique links across %d sites (%d valid, %d unmatched)",
        len(plan.unique_links),
        len(plan.site_plans),
        plan.valid_link_count,
        len(plan.unmatched_links),
    )
    return plan
