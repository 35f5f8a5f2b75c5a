"""Autocomplete expander -- discovers long-tail keywords from a seed.

Two strategies feed the same de-duplicated result list:

* **suffix** -- the bare seed plus a fixed list of intent-revealing suffixes;
* **alpha** -- the seed followed by each letter a-z.

Queries go out in fixed-width concurrent batches through a passed-in
``RequestLimiter``. Results are merged in query order, so when both
strategies surface the same phrase the entry keeps the strategy of the
earlier query.
"""

import asyncio
import logging
import string
from dataclasses import dataclass
from typing import Optional

from radar.modules.classification.geo import PRIMARY_GEO_TOKEN
from radar.utils.rate_limiter import RequestLimiter
from radar.utils.text_processing import normalize_keyword

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = "suffix"
SOURCE_ALPHA = "alpha"

SUFFIXES: tuple[str, ...] = (
    "", "near me", "today", "this weekend", "schedule", "map", "best",
    "free", "cheap", "guide", "spots", "top", "new", "2026",
    "hidden gem", "downtown", "south", "east", "north",
)
ALPHABET: tuple[str, ...] = tuple(string.ascii_lowercase)

DEFAULT_BATCH_SIZE = 8


@dataclass(frozen=True)
class Suggestion:
    keyword: str
    source: str


@dataclass(frozen=True)
class ExpansionQuery:
    query: str
    source: str


def build_queries(seed: str) -> list[ExpansionQuery]:
    """Suffix queries first (bare seed included), then the alpha sweep."""
    queries = [
        ExpansionQuery(f"{seed} {suffix}" if suffix else seed, SOURCE_SUFFIX)
        for suffix in SUFFIXES
    ]
    queries.extend(ExpansionQuery(f"{seed} {letter}", SOURCE_ALPHA) for letter in ALPHABET)
    return queries


class AutocompleteExpander:
    """Expand seed keywords via a suggest provider.

    Args:
        client: Object with an async ``fetch(query) -> list[str]`` method
            (normally ``SuggestClient``).
        limiter: Shared ``RequestLimiter``; one is created when omitted.
        batch_size: Queries issued concurrently per batch.
        geo_token: Token every discovery must contain; ``None`` disables
            the check.
    """

    def __init__(
        self,
        client,
        limiter: Optional[RequestLimiter] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        geo_token: Optional[str] = PRIMARY_GEO_TOKEN,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._client = client
        self._limiter = limiter or RequestLimiter(max_concurrency=batch_size, name="autocomplete")
        self._batch_size = batch_size
        self._geo_token = geo_token.lower() if geo_token else None

    async def _fetch(self, query: ExpansionQuery) -> list[str]:
        async with self._limiter:
            try:
                return await self._client.fetch(query.query)
            except Exception as exc:
                logger.warning("Autocomplete query %r failed: %s", query.query, exc)
                return []

    async def expand(self, seed: str) -> list[Suggestion]:
        """Return de-duplicated, geo-filtered discoveries for ``seed``."""
        seed_norm = normalize_keyword(seed)
        queries = build_queries(seed_norm)
        seen: set[str] = {seed_norm}
        results: list[Suggestion] = []

        for start in range(0, len(queries), self._batch_size):
            batch = queries[start:start + self._batch_size]
            batch_results = await asyncio.gather(*(self._fetch(q) for q in batch))
            for query, suggestions in zip(batch, batch_results):
                for raw in suggestions:
                    keyword = normalize_keyword(raw)
                    if not keyword or keyword in seen:
                        continue
                    if self._geo_token and self._geo_token not in keyword:
                        continue
                    seen.add(keyword)
                    results.append(Suggestion(keyword=keyword, source=query.source))

        logger.info(
            "Expanded %r: %d queries -> %d discoveries", seed_norm, len(queries), len(results),
        )
        return results
