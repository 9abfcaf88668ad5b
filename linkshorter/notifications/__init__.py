from linkshorter.notifications.base import BaseNotifier
from linkshorter.notifications.logging_notifier import LoggingNotifier
from linkshorter.notifications.dispatcher import NotificationDispatcher


__all__ = [
    'BaseNotifier',
    'LoggingNotifier',
    'NotificationDispatcher',
]
