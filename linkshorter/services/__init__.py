from linkshorter.services.link_service import LinkService
from linkshorter.services.cleanup_scheduler import CleanupScheduler


__all__ = [
    'LinkService',
    'CleanupScheduler',
]
