"""Shortened link entity and its lifecycle transitions.

Identity fields (code, target, owner, timestamps, click limit) are frozen.
The only in-place transitions are click registration and deactivation, both
applied under a per-link lock. A click limit change produces a replacement
instance (see `ShortLinkModel.with_click_limit`).

Classes:
    ClickOutcome:
        Result of a click registration attempt.
    ShortLinkModel:
        A shortened link with quota and expiry metadata.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> now = datetime.now(UTC)
    >>> link = ShortLinkModel(
    ...     code='aB3xY9',
    ...     target='https://example.com/article/123',
    ...     owner_id='alice',
    ...     created_at=now,
    ...     expires_at=now + timedelta(hours=24),
    ...     click_limit=2,
    ... )
    >>> link.register_click()
    <ClickOutcome.ACCEPTED: 'accepted'>
    >>> link.register_click()
    <ClickOutcome.EXHAUSTED: 'exhausted'>
    >>> link.active
    False
"""

import threading
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import StrEnum
from collections.abc import Callable

from linkshorter.types import OwnerId
from linkshorter.exceptions import InvalidInputError
from linkshorter.constants import REASON_CLICK_LIMIT_EXHAUSTED, REASON_DEACTIVATED


class ClickOutcome(StrEnum):
    """Result of `ShortLinkModel.register_click()`."""

    ACCEPTED = 'accepted'  # click counted, quota left
    EXHAUSTED = 'exhausted'  # click counted, quota now used up
    EXPIRED = 'expired'  # TTL passed, link deactivated
    INACTIVE = 'inactive'  # link was already deactivated
    LIMIT_REACHED = 'limit_reached'  # active link found with no quota left, now deactivated
    SUPERSEDED = 'superseded'  # instance replaced in the store, re-read and retry

    @property
    def successful(self) -> bool:
        return self in (ClickOutcome.ACCEPTED, ClickOutcome.EXHAUSTED)


@dataclass
class _UsageState:
    click_count: int = 0
    active: bool = True
    retired: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


@dataclass(frozen=True, eq=False)
class ShortLinkModel:
    """Represent a shortened link and its lifecycle state.

    Attributes:
        code (str):
            Fixed-length alphanumeric identifier, unique in the store.
        target (str):
            Destination URL the code resolves to.
        owner_id (OwnerId):
            Opaque identifier of the link's creator.
        created_at (datetime):
            Creation moment (UTC).
        expires_at (datetime):
            Moment after which the link is expired (`created_at + ttl`).
        click_limit (int):
            Maximum number of successful resolutions.

    Two links are equal if and only if their codes match.
    """

    code: str
    target: str
    owner_id: OwnerId
    created_at: datetime
    expires_at: datetime
    click_limit: int
    _state: _UsageState = field(default_factory=_UsageState, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not self.code.strip():
            raise InvalidInputError('Short code cannot be empty.')
        if not isinstance(self.target, str) or not self.target.strip():
            raise InvalidInputError('Target URL cannot be empty.')
        if self.owner_id is None or (isinstance(self.owner_id, str) and not self.owner_id.strip()):
            raise InvalidInputError('Owner ID cannot be empty.')
        if self.created_at is None or self.expires_at is None:
            raise InvalidInputError('Creation and expiration times must be set.')
        if isinstance(self.click_limit, bool) or not isinstance(self.click_limit, int) or self.click_limit <= 0:
            raise InvalidInputError(f'Click limit must be a positive integer (given value: {self.click_limit!r}).')

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShortLinkModel):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    @property
    def click_count(self) -> int:
        return self._state.click_count

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def remaining_clicks(self) -> int:
        return max(0, self.click_limit - self._state.click_count)

    @property
    def has_reached_click_limit(self) -> bool:
        return self._state.click_count >= self.click_limit

    @property
    def inactive_reason(self) -> str:
        """Human-readable reason why the link no longer resolves."""
        return REASON_CLICK_LIMIT_EXHAUSTED if self.has_reached_click_limit else REASON_DEACTIVATED

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at

    def is_owned_by(self, owner_id: OwnerId) -> bool:
        return self.owner_id == owner_id

    def deactivate(self) -> None:
        """Switch the link off. One-way: a deactivated link never becomes active again."""
        with self._state.lock:
            self._state.active = False

    def register_click(self, now: datetime | None = None) -> ClickOutcome:
        """Evaluate the link's state and count one click if it may still resolve.

        Expiry, activity and quota are checked and the counter is incremented
        in one critical section, so concurrent callers can never push
        `click_count` past `click_limit`.

        Args:
            now (datetime | None):
                Moment of the click. Defaults to the current UTC time.

        Returns:
            ClickOutcome:
                `ACCEPTED` or `EXHAUSTED` when the click was counted, otherwise
                the reason it was refused.
        """
        now = now or datetime.now(UTC)
        state = self._state
        with state.lock:
            if state.retired:
                return ClickOutcome.SUPERSEDED
            if now >= self.expires_at:
                state.active = False
                return ClickOutcome.EXPIRED
            if not state.active:
                return ClickOutcome.INACTIVE
            if state.click_count >= self.click_limit:
                state.active = False
                return ClickOutcome.LIMIT_REACHED

            state.click_count += 1
            if state.click_count >= self.click_limit:
                state.active = False
                return ClickOutcome.EXHAUSTED
            return ClickOutcome.ACCEPTED

    def with_click_limit(self, click_limit: int, commit: Callable[['ShortLinkModel'], bool]) -> 'ShortLinkModel | None':
        """Replace this link with a copy carrying a new click limit.

        The copy keeps code, target, owner, timestamps, click count and the
        active flag. `commit` receives the copy while this instance is locked
        and reports whether it was stored (typically a `dao.replace` bound to
        this instance). Either way this instance is retired afterwards and any
        further click on it returns `ClickOutcome.SUPERSEDED`: a refused commit
        means the store no longer holds it.

        Args:
            click_limit (int):
                New maximum number of successful resolutions.
            commit (Callable[[ShortLinkModel], bool]):
                Persists the replacement; returns False if this instance is
                no longer the stored one.

        Returns:
            ShortLinkModel | None:
                The replacement, or None if this instance was already retired
                or the commit was refused.

        Raises:
            InvalidInputError:
                If `click_limit` is not positive or is below the clicks already counted.
        """
        state = self._state
        with state.lock:
            if state.retired:
                return None
            if click_limit < state.click_count:
                raise InvalidInputError(
                    f'Click limit ({click_limit}) cannot be lower than the clicks already registered ({state.click_count}).'
                )

            usage = _UsageState(click_count=state.click_count, active=state.active)
            replacement = dataclasses.replace(self, click_limit=click_limit, _state=usage)
            if replacement.has_reached_click_limit:
                usage.active = False

            committed = commit(replacement)
            state.retired = True
            return replacement if committed else None

    def __repr__(self) -> str:
        return (
            f'ShortLinkModel(code={self.code!r}, target={self.target!r}, owner_id={self.owner_id!r}, '
            f'click_count={self.click_count}, click_limit={self.click_limit}, active={self.active}, '
            f'expires_at={self.expires_at.isoformat()})'
        )
