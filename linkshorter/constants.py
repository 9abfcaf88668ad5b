from enum import StrEnum


class Defaults:
    """Default link lifecycle settings."""

    TTL_MS = 86_400_000  # 24 hours
    CLICK_LIMIT = 100
    CODE_LENGTH = 6
    CLEANUP_INTERVAL_MS = 3_600_000  # 1 hour
    NOTIFICATIONS_ENABLED = True
    LINK_DOMAIN = 'clck.ru'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_FILE = 'LINKSHORTER_CONFIG_FILE'

    class Link(StrEnum):
        DEFAULT_TTL_MS = 'LINKSHORTER_DEFAULT_TTL_MS'
        DEFAULT_CLICK_LIMIT = 'LINKSHORTER_DEFAULT_CLICK_LIMIT'
        CODE_LENGTH = 'LINKSHORTER_CODE_LENGTH'
        CLEANUP_INTERVAL_MS = 'LINKSHORTER_CLEANUP_INTERVAL_MS'
        NOTIFICATIONS_ENABLED = 'LINKSHORTER_NOTIFICATIONS_ENABLED'
        LINK_DOMAIN = 'LINKSHORTER_LINK_DOMAIN'


class Event(StrEnum):
    """Notification event codes (attached to log records as `event`)."""

    LINK_CREATED = 'LINK_CREATED'
    LINK_NOT_FOUND = 'LINK_NOT_FOUND'
    LINK_EXPIRED = 'LINK_EXPIRED'
    CLICK_LIMIT_REACHED = 'CLICK_LIMIT_REACHED'
    LINK_INACTIVE = 'LINK_INACTIVE'
    ACCESS_DENIED = 'ACCESS_DENIED'


# In-memory store: number of lock stripes and the bounded wait on each stripe
STORE_STRIPES = 16
LOCK_TIMEOUT_SECONDS = 5.0

# Short code digest
DIGEST_ALGORITHM = 'sha256'
CODE_SEPARATOR = '|'

# Inactive link reasons
REASON_CLICK_LIMIT_EXHAUSTED = 'click limit exhausted'
REASON_DEACTIVATED = 'link deactivated'
