"""End-to-end lifecycle of short links through a fully wired LinkShorterApp

Covers creation, resolution up to the click limit, owner-gated mutation,
lazy and scheduled expiry, using the real store, generator, dispatcher and
scheduler with a recording notifier.
"""

import time
from datetime import timedelta

import pytest
from freezegun import freeze_time

from linkshorter.app import LinkShorterApp
from linkshorter.notifications import BaseNotifier
from linkshorter.utils import AppConfig


class RecordingNotifier(BaseNotifier):
    def __init__(self):
        self.events = []

    def on_link_created(self, code, full_url, limit, ttl_hours):
        self.events.append(('created', code, full_url, limit, ttl_hours))

    def on_link_not_found(self, code):
        self.events.append(('not_found', code))

    def on_link_expired(self, link):
        self.events.append(('expired', link.code))

    def on_click_limit_reached(self, link):
        self.events.append(('limit_reached', link.code))

    def on_link_inactive(self, link, reason):
        self.events.append(('inactive', link.code, reason))

    def on_access_denied(self, code, requester):
        self.events.append(('access_denied', code, requester))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def app(notifier):
    config = AppConfig(default_ttl_ms=7_200_000, default_click_limit=3, link_domain='https://sho.rt')
    return LinkShorterApp(config=config, notifier=notifier)


def test_click_limit_lifecycle(app, notifier):
    link = app.links.create_link('https://example.com', 'alice')

    results = [app.links.follow_link(link.code) for _ in range(4)]

    assert results == ['https://example.com'] * 3 + [None]
    assert notifier.events == [
        ('created', 'jH1OQp', 'https://sho.rt/jH1OQp', 3, 2),
        ('limit_reached', 'jH1OQp'),
        ('inactive', 'jH1OQp', 'click limit exhausted'),
    ]
    # Exhausted links stay visible to their owner
    assert app.links.get_user_links('alice') == [link]


def test_owner_gated_mutation(app, notifier):
    link = app.links.create_link('https://example.com', 'alice', click_limit=2)

    assert app.links.delete_link(link.code, 'bob') is False
    assert app.links.update_click_limit(link.code, 'bob', 10) is False
    assert app.links.get_link(link.code).click_limit == 2

    assert app.links.update_click_limit(link.code, 'alice', 10) is True
    assert app.links.get_link(link.code).click_limit == 10
    assert app.links.delete_link(link.code, 'alice') is True
    assert app.links.delete_link(link.code, 'alice') is False

    assert ('access_denied', link.code, 'bob') in notifier.events
    assert notifier.events[-1] == ('not_found', link.code)


def test_lazy_and_swept_expiry(app, notifier):
    with freeze_time('2025-10-15 12:00:00') as frozen:
        lazy = app.links.create_link('https://example.com/lazy', 'alice')
        swept = app.links.create_link('https://example.com/swept', 'bob')
        frozen.tick(timedelta(hours=1))
        live = app.links.create_link('https://example.com/live', 'carol')
        frozen.tick(timedelta(hours=1))

        assert app.links.follow_link(lazy.code) is None
        assert ('expired', lazy.code) in notifier.events
        assert app.links.get_link(lazy.code) is None

        assert app.links.cleanup_expired_links() == 1
        assert app.links.get_link(swept.code) is None
        assert app.links.get_link(live.code) is live
        assert app.dao.count() == 1


def test_scheduler_sweeps_in_background(notifier):
    config = AppConfig(default_ttl_ms=-1, cleanup_interval_ms=10)

    with LinkShorterApp(config=config, notifier=notifier) as app:
        app.links.create_link('https://example.com', 'alice')
        deadline = time.monotonic() + 2.0
        while app.dao.count() and time.monotonic() < deadline:
            time.sleep(0.01)

        assert app.dao.count() == 0
