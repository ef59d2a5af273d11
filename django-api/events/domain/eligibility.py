"""Publish eligibility policy.

Artists always publish for free. Planners share a single free publish across
the whole platform: only while nothing has been published yet.
"""

from events.domain.models import PublishEligibility
from events.domain.value_objects import CreatorRole

PLANNER_FREE_PUBLISH_LIMIT = 1


def evaluate_publish_eligibility(role: CreatorRole, published_count: int | None = None) -> PublishEligibility:
    """Decide whether a creator of `role` may publish without paying.

    `published_count` is the platform-wide number of published events, read
    by the caller immediately before the decision. Artists are not counted,
    so their result carries no count.
    """
    if role is CreatorRole.ARTIST:
        return PublishEligibility(allowed=True, requires_payment=False)

    if published_count < PLANNER_FREE_PUBLISH_LIMIT:
        return PublishEligibility(allowed=True, requires_payment=False, published_count=published_count)

    return PublishEligibility(allowed=False, requires_payment=True, published_count=published_count)
