"""Unit tests for NotificationDispatcher in dispatcher.py

Test coverage includes:

1. Forwarding
   - Every event reaches the wrapped notifier with its arguments.

2. Global switch
   - While disabled, nothing is forwarded; enable()/disable() toggle it.

3. Failure isolation
   - A raising notifier is logged and never propagates to the caller.
"""

from unittest.mock import MagicMock

import pytest

from linkshorter.notifications import BaseNotifier, NotificationDispatcher


@pytest.fixture
def notifier():
    return MagicMock(spec=BaseNotifier)


@pytest.fixture
def events(make_link):
    """(method name, arguments) for every notification event."""
    link = make_link()
    return [
        ('on_link_created', ('aB3xY9', 'clck.ru/aB3xY9', 3, 24)),
        ('on_link_not_found', ('aB3xY9',)),
        ('on_link_expired', (link,)),
        ('on_click_limit_reached', (link,)),
        ('on_link_inactive', (link, 'link deactivated')),
        ('on_access_denied', ('aB3xY9', 'bob')),
    ]


# -------------------------------
# 1. Forwarding
# -------------------------------


def test_forwards_every_event(notifier, events):
    dispatcher = NotificationDispatcher(notifier)

    for name, args in events:
        assert getattr(dispatcher, name)(*args) is None
        getattr(notifier, name).assert_called_once_with(*args)


def test_dispatcher_is_a_notifier(notifier):
    assert isinstance(NotificationDispatcher(notifier), BaseNotifier)


# -------------------------------
# 2. Global switch
# -------------------------------


def test_disabled_dispatcher_drops_events(notifier, events):
    dispatcher = NotificationDispatcher(notifier, enabled=False)

    for name, args in events:
        getattr(dispatcher, name)(*args)

    assert notifier.mock_calls == []


def test_enable_and_disable(notifier):
    dispatcher = NotificationDispatcher(notifier, enabled=False)

    dispatcher.enable()
    dispatcher.on_link_not_found('aB3xY9')
    dispatcher.disable()
    dispatcher.on_link_not_found('zzzzzz')

    notifier.on_link_not_found.assert_called_once_with('aB3xY9')


# -------------------------------
# 3. Failure isolation
# -------------------------------


def test_notifier_failures_are_contained(notifier, events, caplog):
    for name, _ in events:
        getattr(notifier, name).side_effect = RuntimeError('delivery failed')
    dispatcher = NotificationDispatcher(notifier)

    with caplog.at_level('ERROR'):
        for name, args in events:
            assert getattr(dispatcher, name)(*args) is None

    assert caplog.text.count('Notification dropped') == len(events)
    assert 'on_access_denied' in caplog.text


def test_wrapped_methods_keep_their_names():
    assert NotificationDispatcher.on_link_expired.__name__ == 'on_link_expired'
