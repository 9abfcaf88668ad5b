"""Notification dispatcher guarding the core from its notifier.

Classes:
    NotificationDispatcher:
        Forwards lifecycle events to a notifier behind a global on/off switch
        and never lets a notifier failure propagate into the caller.

Example:
    >>> notifications = NotificationDispatcher(LoggingNotifier(), enabled=True)
    >>> notifications.on_link_not_found('jH1OQp')   # forwarded
    >>> notifications.disable()
    >>> notifications.on_link_not_found('jH1OQp')   # dropped
"""

import functools
import logging
from typing import TypeVar, Any
from collections.abc import Callable

from linkshorter.models import ShortLinkModel
from linkshorter.types import OwnerId
from linkshorter.notifications.base import BaseNotifier


logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def guard_notification(method: F) -> F:
    """Wrap dispatcher methods so they respect the switch and never raise

    Args:
        method (Callable[..., Any]):
            Dispatcher method forwarding one event to the wrapped notifier.

    Returns:
        Callable[..., Any]:
            Wrapped method which is a no-op while notifications are disabled,
            and which logs and drops any exception raised by the notifier.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if not self.enabled:
            return None
        try:
            return method(self, *args, **kwargs)
        except Exception:
            logger.exception('Notifier failed while handling %s. Notification dropped.', method.__name__)
            return None

    return wrapper


class NotificationDispatcher(BaseNotifier):
    """Forward notifications to a wrapped notifier

    Attributes:
        notifier (BaseNotifier):
            Notifier receiving the events.
        enabled (bool):
            Global switch; while False every event is dropped.
    """

    def __init__(self, notifier: BaseNotifier, enabled: bool = True):
        self.notifier = notifier
        self.enabled = enabled

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    @guard_notification
    def on_link_created(self, code: str, full_url: str, limit: int, ttl_hours: int) -> None:
        self.notifier.on_link_created(code, full_url, limit, ttl_hours)

    @guard_notification
    def on_link_not_found(self, code: str) -> None:
        self.notifier.on_link_not_found(code)

    @guard_notification
    def on_link_expired(self, link: ShortLinkModel) -> None:
        self.notifier.on_link_expired(link)

    @guard_notification
    def on_click_limit_reached(self, link: ShortLinkModel) -> None:
        self.notifier.on_click_limit_reached(link)

    @guard_notification
    def on_link_inactive(self, link: ShortLinkModel, reason: str) -> None:
        self.notifier.on_link_inactive(link, reason)

    @guard_notification
    def on_access_denied(self, code: str, requester: OwnerId) -> None:
        self.notifier.on_access_denied(code, requester)
