from localshortener.services.shortening_service import ShortLinkService, parse_expiry


__all__ = [
    'ShortLinkService',
    'parse_expiry',
]
