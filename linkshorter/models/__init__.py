from linkshorter.models.short_link_model import ShortLinkModel, ClickOutcome


__all__ = [
    'ShortLinkModel',
    'ClickOutcome',
]
