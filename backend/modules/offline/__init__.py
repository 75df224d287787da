"""
Offline caching policy for the customer PWA.

Decides, per outgoing request, whether to pass it through, answer from
cache or go to the network, mirroring what the browser-side worker does.
"""

from .services.cache_controller import (
    CacheController,
    CacheStorage,
    VERSION,
    PRECACHE_URLS,
)

__all__ = ["CacheController", "CacheStorage", "VERSION", "PRECACHE_URLS"]
