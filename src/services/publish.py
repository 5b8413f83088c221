"""
Scheduled post promotion.

The post lifecycle never promotes scheduled posts by itself; this job is the
time-driven trigger. It re-invokes PostRepository.update with
status="published" on behalf of each post's owner, so published_at is stamped
by the normal lifecycle rule.
"""

import logging

from src.components.posts import PostRepository, parse_rows
from src.domain.entities import PostInput
from src.domain.errors import PostError
from src.ports.clock import ClockPort
from src.ports.gateway import Order, PostGatewayPort, PostQuery

logger = logging.getLogger(__name__)


class PublishDueJob:
    def __init__(self, gateway: PostGatewayPort, repository: PostRepository, clock: ClockPort):
        self.gateway = gateway
        self.repository = repository
        self.clock = clock

    def run(self) -> int:
        """
        Publish every scheduled post whose scheduled_at has passed.
        Returns number of posts published.
        """
        now = self.clock.now_utc()
        due = parse_rows(
            self.gateway.select_posts(
                PostQuery(
                    equals={"status": "scheduled"},
                    at_most={"scheduled_at": now},
                    order_by=(Order("scheduled_at"),),
                )
            )
        )

        count = 0
        for post in due:
            try:
                self.repository.update(post.author_id, post.id, PostInput(status="published"))
            except PostError:
                logger.exception("Failed to publish scheduled post %s", post.id)
                continue
            count += 1

        logger.info("Published %d of %d due scheduled posts", count, len(due))
        return count
