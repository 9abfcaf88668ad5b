import logging

from linkshorter.models import ShortLinkModel
from linkshorter.types import OwnerId
from linkshorter.constants import Event
from linkshorter.notifications.base import BaseNotifier


logger = logging.getLogger(__name__)


class LoggingNotifier(BaseNotifier):
    """Report link lifecycle events through the logging stack.

    Every record carries a stable `event` code (see `linkshorter.constants.Event`)
    so downstream consumers can filter on it.
    """

    def on_link_created(self, code: str, full_url: str, limit: int, ttl_hours: int) -> None:
        logger.info(
            'Short link %s created (click limit: %s, lifetime: %sh).',
            full_url,
            limit,
            ttl_hours,
            extra={'shortcode': code, 'event': Event.LINK_CREATED, 'clickLimit': limit, 'ttlHours': ttl_hours},
        )

    def on_link_not_found(self, code: str) -> None:
        logger.info(
            "Short link with code '%s' not found.",
            code,
            extra={'shortcode': code, 'event': Event.LINK_NOT_FOUND},
        )

    def on_link_expired(self, link: ShortLinkModel) -> None:
        logger.info(
            'Short link expired. Create a new link to keep using %s.',
            link.target,
            extra={'shortcode': link.code, 'event': Event.LINK_EXPIRED, 'expiresAt': link.expires_at},
        )

    def on_click_limit_reached(self, link: ShortLinkModel) -> None:
        logger.info(
            'Click limit reached (%s/%s). Create a new link to keep using %s.',
            link.click_count,
            link.click_limit,
            link.target,
            extra={'shortcode': link.code, 'event': Event.CLICK_LIMIT_REACHED},
        )

    def on_link_inactive(self, link: ShortLinkModel, reason: str) -> None:
        logger.info(
            'Short link unavailable: %s.',
            reason,
            extra={'shortcode': link.code, 'event': Event.LINK_INACTIVE, 'reason': reason},
        )

    def on_access_denied(self, code: str, requester: OwnerId) -> None:
        logger.warning(
            "Access denied: only the owner can modify short link '%s'.",
            code,
            extra={'shortcode': code, 'event': Event.ACCESS_DENIED, 'requester': requester},
        )
