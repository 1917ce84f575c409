from urlshortener.services.shortening_service import ShorteningService, ShortenResult
from urlshortener.services.resolution_service import ResolutionService


__all__ = [
    'ShorteningService',
    'ShortenResult',
    'ResolutionService',
]
