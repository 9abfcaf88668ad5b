"""Helper utilities shared across the link lifecycle core.

Functions:
    utcnow() -> datetime
        Current moment as a timezone-aware UTC datetime
    get_short_url(shortcode: str, domain: str) -> str
        Get string representation of short URL for a given shortcode
    is_http_url(url: str) -> bool
        Check that a string is an absolute http(s) URL

Example:
    >>> from linkshorter.utils.helpers import get_short_url
    >>> get_short_url('jH1OQp', 'clck.ru')
    'clck.ru/jH1OQp'
"""

from datetime import datetime, UTC
from urllib.parse import urlparse


def utcnow() -> datetime:
    """Return the current moment in UTC.

    Resolved at call time so tests can freeze or move the clock.
    """
    return datetime.now(UTC)


def get_short_url(shortcode: str, domain: str) -> str:
    """Get string representation of shortened URL

    The domain is a display prefix only; nothing resolves it.

    Args:
        shortcode (str): shortcode
        domain (str): display domain, e.g. 'clck.ru' or 'https://sho.rt/'

    Returns:
        str: short url string representation
    """
    return f'{domain.rstrip("/")}/{shortcode}'


def is_http_url(url: str) -> bool:
    """Check that a string is an absolute http(s) URL with a host

    Args:
        url (str): candidate URL

    Returns:
        bool: True if `url` starts with http:// or https:// and names a host.

    Example:
        >>> is_http_url('https://example.com/page')
        True
        >>> is_http_url('ftp://example.com')
        False
        >>> is_http_url('https://')
        False
    """
    if not url.startswith(('http://', 'https://')):
        return False
    try:
        components = urlparse(url)
        # Accessing .port validates the port component
        components.port
    except ValueError:
        return False
    return bool(components.netloc) and bool(components.hostname)
