from linkshorter.utils.config import AppConfig, load_config
from linkshorter.utils.helpers import utcnow, get_short_url, is_http_url
from linkshorter.utils.shortener import ShortCodeGenerator
from linkshorter.utils.logging import initialize_logging


__all__ = [
    'ShortCodeGenerator',
    'AppConfig',
    'load_config',
    'utcnow',
    'get_short_url',
    'is_http_url',
    'initialize_logging',
]
