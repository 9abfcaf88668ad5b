"""Composition root wiring the link lifecycle core together

Builds, in dependency order: configuration, store, code generator,
notification dispatcher, lifecycle service and cleanup scheduler. The
scheduler is owned by this instance and passed explicitly; nothing is global.

Example:
    >>> with LinkShorterApp() as app:
    ...     link = app.links.create_link('https://example.com', owner_id)
    ...     app.links.follow_link(link.code)
    'https://example.com'
"""

import logging

from linkshorter.dao.memory import ShortLinkMemoryDAO
from linkshorter.notifications import BaseNotifier, LoggingNotifier, NotificationDispatcher
from linkshorter.services import LinkService, CleanupScheduler
from linkshorter.types import Clock
from linkshorter.utils import AppConfig, ShortCodeGenerator, load_config, initialize_logging


logger = logging.getLogger(__name__)


class LinkShorterApp:
    """Own one fully wired instance of the link lifecycle core

    Attributes:
        config (AppConfig): settings the core was built with.
        dao (ShortLinkMemoryDAO): in-memory store.
        notifications (NotificationDispatcher): switchable, failure-proof notifier.
        links (LinkService): lifecycle service (the API exposed to front ends).
        scheduler (CleanupScheduler): background expiry sweep.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        notifier: BaseNotifier | None = None,
        clock: Clock | None = None,
        configure_logging: bool = False,
    ):
        if configure_logging:
            initialize_logging()

        self.config = config or load_config()
        self.dao = ShortLinkMemoryDAO()
        self.notifications = NotificationDispatcher(
            notifier or LoggingNotifier(),
            enabled=self.config.notifications_enabled,
        )
        self.links = LinkService(
            dao=self.dao,
            generator=ShortCodeGenerator(self.config.code_length),
            notifier=self.notifications,
            config=self.config,
            clock=clock,
        )
        self.scheduler = CleanupScheduler(self.links, self.config.cleanup_interval_ms)

    def start(self) -> 'LinkShorterApp':
        self.scheduler.start()
        logger.debug('Link shortener started.')
        return self

    def stop(self) -> None:
        self.scheduler.stop()
        logger.debug('Link shortener stopped.')

    def __enter__(self) -> 'LinkShorterApp':
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
