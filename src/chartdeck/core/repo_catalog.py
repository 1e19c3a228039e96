"""Cached repository catalog: resolves repository names to URLs and back."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from cachetools import Cache, TTLCache

from chartdeck.core.api_client import BackendClient
from chartdeck.core.errors import NotFound
from chartdeck.models.repo import Repository

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

_REPOSITORIES = "repositories"


class RepositoryCatalog:
    """Owns the process-wide repository list.

    The list is fetched on first use and kept until it expires (``ttl``
    seconds after the fetch, measured with ``clock``) or is explicitly
    invalidated.  ``ttl=None`` keeps it forever.  Concurrent first callers
    share a single fetch.
    """

    def __init__(
        self,
        backend: BackendClient,
        *,
        ttl: float | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.backend = backend
        self.ttl = ttl
        self._cache: Cache = Cache(maxsize=1) if ttl is None else TTLCache(maxsize=1, ttl=ttl, timer=clock)
        # Bumped by invalidate(); a fetch started under an older generation is not cached
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> bool:
        return _REPOSITORIES in self._cache

    def invalidate(self) -> None:
        """Drop the cached list; the next lookup refetches."""
        self._cache.clear()
        self._generation += 1

    async def list(self) -> list[Repository]:
        """Return the repository list, fetching it when not cached."""
        repos = self._cache.get(_REPOSITORIES)
        if repos is not None:
            return list(repos)
        async with self._lock:
            # Another caller may have filled the cache while we waited
            repos = self._cache.get(_REPOSITORIES)
            if repos is None:
                repos = await self._fetch()
            return list(repos)

    async def refresh(self) -> list[Repository]:
        """Refetch unconditionally and replace the cache."""
        async with self._lock:
            return list(await self._fetch())

    async def _fetch(self) -> list[Repository]:
        generation = self._generation
        repos = await self.backend.list_repositories()
        if generation != self._generation:
            logger.debug("Repository list invalidated during fetch, not caching it")
            return repos
        self._cache[_REPOSITORIES] = repos
        logger.debug("Cached %d chart repositories", len(repos))
        return repos

    async def url_for_name(self, name: str) -> str:
        for repo in await self.list():
            if repo.name == name:
                return repo.url
        raise NotFound.repository_name(name)

    async def name_for_url(self, url: str) -> str:
        for repo in await self.list():
            if repo.url == url:
                return repo.name
        raise NotFound.repository_url(url)
