from datetime import datetime, timedelta, UTC
from collections.abc import Callable

import pytest

from linkshorter.models import ShortLinkModel


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_link(now: datetime) -> Callable[..., ShortLinkModel]:
    """Factory building ShortLinkModel instances with sensible defaults."""

    def _make_link(
        code: str = 'aB3xY9',
        target: str = 'https://example.com/article/123',
        owner_id: str = 'alice',
        click_limit: int = 3,
        ttl: timedelta = timedelta(hours=24),
        created_at: datetime | None = None,
    ) -> ShortLinkModel:
        created_at = created_at or now
        return ShortLinkModel(
            code=code,
            target=target,
            owner_id=owner_id,
            created_at=created_at,
            expires_at=created_at + ttl,
            click_limit=click_limit,
        )

    return _make_link
