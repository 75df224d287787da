from .cache_controller import CacheController, CacheStorage, ResponseCache

__all__ = ["CacheController", "CacheStorage", "ResponseCache"]
