"""Tavily web search wrapper with async support."""

from __future__ import annotations

import logging
import os

from tavily import AsyncTavilyClient

from translation_verifier.cache.search_cache import SearchCache
from translation_verifier.errors import SearchError
from translation_verifier.models.search import SearchHit

logger = logging.getLogger(__name__)


class SearchClient:
    """Async Tavily search client returning ranked ``SearchHit`` lists."""

    def __init__(
        self,
        api_key: str | None = None,
        *,
        search_depth: str = "basic",
        timeout: float = 30.0,
        cache: SearchCache | None = None,
    ):
        key = api_key or os.environ.get("TAVILY_API_KEY")
        if not key:
            raise ValueError(
                "Tavily API key required. Set TAVILY_API_KEY env var or pass api_key."
            )
        self.client = AsyncTavilyClient(api_key=key)
        self.search_depth = search_depth
        self.timeout = timeout
        self.cache = cache

    async def search(self, query: str, max_results: int = 5) -> list[SearchHit]:
        """Search and return at most ``max_results`` hits in rank order."""
        if self.cache is not None:
            cached = self.cache.get(query, max_results)
            if cached is not None:
                logger.debug("Search cache hit: %s", query)
                return cached

        logger.info("Searching: %s", query)
        try:
            response = await self.client.search(
                query=query,
                max_results=max_results,
                search_depth=self.search_depth,
                timeout=self.timeout,
            )
        except Exception as exc:
            logger.error("Search failed", exc_info=True)
            raise SearchError(f"Search failed for {query!r}: {exc}") from exc

        hits = []
        for r in response.get("results") or []:
            if not isinstance(r, dict) or not r.get("url"):
                logger.warning("Ignoring search result without URL: %r", r)
                continue
            hits.append(SearchHit(
                url=r["url"], title=r.get("title") or "", abstract_text=r.get("content") or ""
            ))
        hits = hits[:max_results]
        if self.cache is not None:
            self.cache.put(query, max_results, hits)
        return hits
