"""Link lifecycle service

The only writer of business rules: creation, resolution with click
accounting, owner-gated mutation and the expiry sweep.

Lifecycle of a link:
    Active -> Exhausted   click count reached the click limit (kept in the store)
    Active -> Expired     now >= expires_at (removed lazily on access or by the sweep)
    Active/Exhausted -> Deleted   explicit owner action (removed)

Not found, access denied, expired, inactive and limit reached are ordinary
outcomes: they are reported to the notifier and returned as None/False.
Only malformed input raises (`InvalidInputError`), always before any store
mutation.

Example:
    >>> service = LinkService(dao, ShortCodeGenerator(6), notifier, AppConfig())
    >>> link = service.create_link('https://example.com', 'alice', click_limit=3)
    >>> service.follow_link(link.code)
    'https://example.com'
    >>> service.delete_link(link.code, 'bob')
    False
"""

import logging
import functools

from linkshorter.types import Clock, OwnerId
from linkshorter.models import ShortLinkModel, ClickOutcome
from linkshorter.dao.base import ShortLinkBaseDAO
from linkshorter.notifications.base import BaseNotifier
from linkshorter.exceptions import InvalidInputError
from linkshorter.constants import Event
from linkshorter.utils.config import AppConfig
from linkshorter.utils.shortener import ShortCodeGenerator
from linkshorter.utils.helpers import utcnow, get_short_url, is_http_url


logger = logging.getLogger(__name__)


def _validate_click_limit(click_limit: int) -> None:
    if isinstance(click_limit, bool) or not isinstance(click_limit, int) or click_limit <= 0:
        raise InvalidInputError(f'Click limit must be a positive integer (given value: {click_limit!r}).')


def _validate_url(url: str) -> None:
    if not isinstance(url, str) or not url.strip():
        raise InvalidInputError('URL cannot be empty.')
    if not is_http_url(url):
        raise InvalidInputError(f'URL must be an absolute http:// or https:// URL (given value: {url!r}).')


class LinkService:
    """Orchestrate the lifecycle of shortened links

    Attributes:
        dao (ShortLinkBaseDAO):
            Store holding every live link.
        generator (ShortCodeGenerator):
            Deterministic code generator.
        notifier (BaseNotifier):
            Receives business outcomes; expected not to raise
            (wrap it in a NotificationDispatcher).
        config (AppConfig):
            Default TTL, default click limit and display domain.
        clock (Clock):
            Source of the current UTC time.
    """

    def __init__(
        self,
        dao: ShortLinkBaseDAO,
        generator: ShortCodeGenerator,
        notifier: BaseNotifier,
        config: AppConfig,
        clock: Clock | None = None,
    ):
        self.dao = dao
        self.generator = generator
        self.notifier = notifier
        self.config = config
        self.clock = clock or utcnow

    def create_link(self, url: str, owner_id: OwnerId, click_limit: int | None = None) -> ShortLinkModel:
        """Shorten a URL for an owner

        Args:
            url (str):
                Absolute http(s) destination URL.
            owner_id (OwnerId):
                Creator of the link.
            click_limit (int | None):
                Maximum number of successful resolutions.
                Defaults to the configured default click limit.

        Returns:
            ShortLinkModel: the stored link.

        Raises:
            InvalidInputError:
                If the URL is blank or not http(s), the click limit is not
                positive, or the owner is unset.

        NOTE: Codes are deterministic per (url, owner) and no uniqueness retry
              is performed; a colliding code replaces the link stored under it.
        """
        _validate_url(url)
        click_limit = self.config.default_click_limit if click_limit is None else click_limit
        _validate_click_limit(click_limit)

        code = self.generator.generate(url, owner_id)
        now = self.clock()
        link = ShortLinkModel(
            code=code,
            target=url,
            owner_id=owner_id,
            created_at=now,
            expires_at=now + self.config.default_ttl,
            click_limit=click_limit,
        )
        self.dao.save(link)
        logger.info(
            'Created short link.',
            extra={'shortcode': code, 'ownerId': owner_id, 'clickLimit': click_limit, 'event': Event.LINK_CREATED},
        )

        self.notifier.on_link_created(
            code,
            get_short_url(code, self.config.link_domain),
            click_limit,
            self.config.ttl_hours,
        )
        return link

    def follow_link(self, code: str) -> str | None:
        """Resolve a code to its destination URL and count the click

        The expiry/activity/quota evaluation and the click increment happen
        atomically per link (see `ShortLinkModel.register_click`), so
        concurrent callers never exceed the click limit.

        Args:
            code (str): short code to resolve.

        Returns:
            str | None:
                Destination URL, or None if the link is unknown, expired,
                inactive or out of clicks.
        """
        while True:
            link = self.dao.find_by_code(code)
            if link is None:
                logger.debug('Short link not found.', extra={'shortcode': code, 'event': Event.LINK_NOT_FOUND})
                self.notifier.on_link_not_found(code)
                return None

            outcome = link.register_click(self.clock())
            # The link's click limit was replaced concurrently; resolve against the replacement
            if outcome is not ClickOutcome.SUPERSEDED:
                break

        if outcome is ClickOutcome.EXPIRED:
            logger.info('Short link expired. Evicting it.', extra={'shortcode': code, 'event': Event.LINK_EXPIRED})
            self.notifier.on_link_expired(link)
            self.dao.delete(code, expected=link)
            return None

        if outcome is ClickOutcome.INACTIVE:
            reason = link.inactive_reason
            logger.debug('Short link inactive.', extra={'shortcode': code, 'event': Event.LINK_INACTIVE, 'reason': reason})
            self.notifier.on_link_inactive(link, reason)
            return None

        if outcome is ClickOutcome.LIMIT_REACHED:
            logger.info('Click limit already reached.', extra={'shortcode': code, 'event': Event.CLICK_LIMIT_REACHED})
            self.notifier.on_click_limit_reached(link)
            return None

        if outcome is ClickOutcome.EXHAUSTED:
            logger.info('Click limit reached with this click.', extra={'shortcode': code, 'event': Event.CLICK_LIMIT_REACHED})
            self.notifier.on_click_limit_reached(link)

        logger.debug(
            'Resolved short link (%s/%s clicks).',
            link.click_count,
            link.click_limit,
            extra={'shortcode': code},
        )
        return link.target

    def get_link(self, code: str) -> ShortLinkModel | None:
        return self.dao.find_by_code(code)

    def get_user_links(self, owner_id: OwnerId) -> list[ShortLinkModel]:
        return self.dao.find_by_owner(owner_id)

    def delete_link(self, code: str, requester: OwnerId) -> bool:
        """Delete a link on behalf of its owner

        Returns:
            bool: True if the link was removed; False if it does not exist or
                  `requester` is not its owner (the link is left untouched).
        """
        while True:
            link = self._find_owned(code, requester)
            if link is None:
                return False
            if self.dao.delete(code, expected=link):
                logger.info('Deleted short link.', extra={'shortcode': code, 'ownerId': requester})
                return True
            # Replaced or removed between lookup and delete: look again

    def update_click_limit(self, code: str, requester: OwnerId, new_limit: int) -> bool:
        """Change a link's click limit on behalf of its owner

        Only the limit changes: the click count and active flag carry over to
        the replacement stored under the same code. An exhausted link stays
        inactive even if the new limit leaves room.

        Returns:
            bool: True if the limit was updated; False if the link does not
                  exist or `requester` is not its owner.

        Raises:
            InvalidInputError:
                If new_limit is not positive. Checked before any lookup.
            InvalidInputError:
                If new_limit is lower than the clicks already registered. This
                depends on the stored link, so it is checked after the lookup and
                the ownership check: a non-owner gets False, never this error.
                Nothing is written when it is raised.
        """
        _validate_click_limit(new_limit)

        while True:
            link = self._find_owned(code, requester)
            if link is None:
                return False

            replacement = link.with_click_limit(new_limit, functools.partial(self.dao.replace, expected=link))
            if replacement is not None:
                logger.info(
                    'Updated click limit.',
                    extra={'shortcode': code, 'ownerId': requester, 'previousClickLimit': link.click_limit, 'clickLimit': new_limit},
                )
                return True
            # Retired by another update, or deleted/replaced in the store: look again

    def cleanup_expired_links(self) -> int:
        """Remove every expired link from the store

        Returns:
            int: number of links removed.
        """
        now = self.clock()
        removed = 0
        for link in self.dao.find_all():
            if link.is_expired(now) and self.dao.delete(link.code, expected=link):
                removed += 1

        if removed:
            logger.info('Removed expired short links.', extra={'removed': removed})
        return removed

    def _find_owned(self, code: str, requester: OwnerId) -> ShortLinkModel | None:
        link = self.dao.find_by_code(code)
        if link is None:
            logger.debug('Short link not found.', extra={'shortcode': code, 'event': Event.LINK_NOT_FOUND})
            self.notifier.on_link_not_found(code)
            return None
        if not link.is_owned_by(requester):
            logger.info(
                'Requester does not own short link.',
                extra={'shortcode': code, 'requester': requester, 'event': Event.ACCESS_DENIED},
            )
            self.notifier.on_access_denied(code, requester)
            return None
        return link
