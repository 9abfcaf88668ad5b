"""Abstract base class for notifiers.

A notifier is the outward-facing collaborator the lifecycle service reports
business outcomes to (link created, not found, expired, ...). Implementations
format and deliver them; they hold no state the core depends on.

Example:
    >>> class PrintNotifier(BaseNotifier):
    ...     def on_link_created(self, code, full_url, limit, ttl_hours):
    ...         print(f'Created {full_url} ({limit} clicks, {ttl_hours}h)')
    ...     ...
"""

from abc import ABC, abstractmethod

from linkshorter.models import ShortLinkModel
from linkshorter.types import OwnerId


class BaseNotifier(ABC):
    """Interface for link lifecycle notifications.

    Methods:
        on_link_created(code, full_url, limit, ttl_hours) -> None
        on_link_not_found(code) -> None
        on_link_expired(link) -> None
        on_click_limit_reached(link) -> None
        on_link_inactive(link, reason) -> None
        on_access_denied(code, requester) -> None
    """

    @abstractmethod
    def on_link_created(self, code: str, full_url: str, limit: int, ttl_hours: int) -> None:
        pass

    @abstractmethod
    def on_link_not_found(self, code: str) -> None:
        pass

    @abstractmethod
    def on_link_expired(self, link: ShortLinkModel) -> None:
        pass

    @abstractmethod
    def on_click_limit_reached(self, link: ShortLinkModel) -> None:
        pass

    @abstractmethod
    def on_link_inactive(self, link: ShortLinkModel, reason: str) -> None:
        pass

    @abstractmethod
    def on_access_denied(self, code: str, requester: OwnerId) -> None:
        pass
