# backend/modules/offline/services/cache_controller.py

import json
import logging
from typing import Awaitable, Callable, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

VERSION = "milk-v1"
STATIC_CACHE = f"{VERSION}-static"
RUNTIME_CACHE = f"{VERSION}-runtime"

# Documents the app needs offline from the first visit
PRECACHE_URLS = [
    "/app",
    "/app.html",
    "/index.html",
    "/",
    "/admin.html",
    "/manifest.webmanifest",
    "/favicon.png",
]

HTML_FALLBACKS = ["/app.html", "/index.html"]
ASSET_FALLBACK = "/favicon.png"
NETWORK_FIRST_PREFIXES = ("/api/", "/ws/")
API_OFFLINE_MESSAGE = "Offline / brak odpowiedzi API"

Fetcher = Callable[[httpx.Request], Awaitable[httpx.Response]]


class ResponseCache:
    """One named cache: GET responses keyed by absolute URL"""

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, httpx.Response] = {}

    def __len__(self):
        return len(self._entries)

    async def put(self, request: httpx.Request, response: httpx.Response) -> None:
        self._entries[str(request.url)] = await _copy_response(response)

    async def match(self, url: str) -> Optional[httpx.Response]:
        stored = self._entries.get(url)
        if stored is None:
            return None
        return await _copy_response(stored)


class CacheStorage:
    """All caches of one origin, searched in creation order"""

    def __init__(self):
        self._caches: Dict[str, ResponseCache] = {}

    def open(self, name: str) -> ResponseCache:
        if name not in self._caches:
            self._caches[name] = ResponseCache(name)
        return self._caches[name]

    def keys(self) -> List[str]:
        return list(self._caches)

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    async def match(self, url: str) -> Optional[httpx.Response]:
        for cache in self._caches.values():
            response = await cache.match(url)
            if response is not None:
                return response
        return None


async def _copy_response(response: httpx.Response) -> httpx.Response:
    content = await response.aread()
    return httpx.Response(
        status_code=response.status_code,
        headers=response.headers,
        content=content,
    )


def _offline_text() -> httpx.Response:
    return httpx.Response(503, headers={"Content-Type": "text/plain"}, content=b"Offline")


def _offline_json() -> httpx.Response:
    body = json.dumps({"ok": False, "message": API_OFFLINE_MESSAGE}, ensure_ascii=False)
    return httpx.Response(
        503,
        headers={"Content-Type": "application/json"},
        content=body.encode("utf-8"),
    )


class CacheController:
    """
    Request interception policy for the PWA.

    ``handle`` returns ``None`` when the request should go out untouched,
    otherwise the response to serve. Precedence:

    1. non-GET and cross-origin requests pass through
    2. HTML navigations: network first, then cache, then the app shell
    3. ``/api/`` and ``/ws/``: network first, then cache, then a JSON 503
    4. everything else: cache first, then network, then the favicon
    """

    def __init__(
        self,
        origin: str,
        fetch: Fetcher,
        storage: Optional[CacheStorage] = None,
        version: str = VERSION,
    ):
        self.origin = httpx.URL(origin)
        self.fetch = fetch
        self.storage = storage or CacheStorage()
        self.static_cache = f"{version}-static"
        self.runtime_cache = f"{version}-runtime"

    # ========== Lifecycle ==========

    async def install(self) -> None:
        """Precache the app shell; a failing document aborts the install."""
        cache = self.storage.open(self.static_cache)
        for path in PRECACHE_URLS:
            request = httpx.Request("GET", self.url_for(path))
            response = await self.fetch(request)
            if response.is_error:
                raise httpx.HTTPStatusError(
                    f"Precache of {path} failed with {response.status_code}",
                    request=request,
                    response=response,
                )
            await cache.put(request, response)
        logger.info(f"Precached {len(PRECACHE_URLS)} documents into {self.static_cache}")

    async def activate(self) -> List[str]:
        """Drop caches left behind by older versions."""
        keep = {self.static_cache, self.runtime_cache}
        removed = [name for name in self.storage.keys() if name not in keep]
        for name in removed:
            self.storage.delete(name)
        if removed:
            logger.info(f"Removed stale caches: {', '.join(removed)}")
        return removed

    # ========== Routing ==========

    async def handle(self, request: httpx.Request) -> Optional[httpx.Response]:
        if request.method != "GET":
            return None
        if not self.is_same_origin(request.url):
            return None

        if self.is_html_request(request):
            return await self._network_first_html(request)
        if self.is_network_first(request.url):
            return await self._network_first_api(request)
        return await self._cache_first(request)

    def is_same_origin(self, url: httpx.URL) -> bool:
        return (
            url.scheme == self.origin.scheme
            and url.host == self.origin.host
            and url.port == self.origin.port
        )

    @staticmethod
    def is_html_request(request: httpx.Request) -> bool:
        if request.headers.get("sec-fetch-mode") == "navigate":
            return True
        return "text/html" in request.headers.get("accept", "")

    @staticmethod
    def is_network_first(url: httpx.URL) -> bool:
        return url.path.startswith(NETWORK_FIRST_PREFIXES)

    def url_for(self, path: str) -> str:
        return str(self.origin.join(path))

    # ========== Strategies ==========

    async def _fetch_and_store(self, request: httpx.Request) -> httpx.Response:
        response = await self.fetch(request)
        await self.storage.open(self.runtime_cache).put(request, response)
        return response

    async def _network_first_html(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self._fetch_and_store(request)
        except httpx.TransportError as e:
            logger.debug(f"Network unavailable for {request.url}: {e}")

        cached = await self.storage.match(str(request.url))
        if cached is not None:
            return cached

        for path in HTML_FALLBACKS:
            fallback = await self.storage.match(self.url_for(path))
            if fallback is not None:
                return fallback

        return _offline_text()

    async def _network_first_api(self, request: httpx.Request) -> httpx.Response:
        try:
            return await self._fetch_and_store(request)
        except httpx.TransportError as e:
            logger.debug(f"Network unavailable for {request.url}: {e}")

        cached = await self.storage.match(str(request.url))
        return cached if cached is not None else _offline_json()

    async def _cache_first(self, request: httpx.Request) -> httpx.Response:
        cached = await self.storage.match(str(request.url))
        if cached is not None:
            return cached

        try:
            return await self._fetch_and_store(request)
        except httpx.TransportError as e:
            logger.debug(f"Network unavailable for {request.url}: {e}")

        fallback = await self.storage.match(self.url_for(ASSET_FALLBACK))
        return fallback if fallback is not None else _offline_text()
