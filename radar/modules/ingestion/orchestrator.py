"""Ingestion orchestrator -- seeds, expands, scores, and persists keywords.

A run walks a fixed sequence of states::

    SEEDING -> EXPANDING -> SCORING -> PERSISTING -> DONE

* **SEEDING** normalises the seed list and drops duplicate phrases.
* **EXPANDING** asks the autocomplete expander for discoveries from the
  highest-volume seeds. A seed whose expansion fails is logged and
  skipped.
* **SCORING** looks every candidate up in the store. Unknown keywords get
  the full classification and scoring pass; known ones are only queued
  for a refresh so earlier scores and manual edits survive.
* **PERSISTING** writes each keyword in its own transaction. A failing
  row is logged and counted; an unreachable store aborts the run with
  ``StoreUnavailableError`` carrying the partial summary.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from radar.exceptions import StoreUnavailableError
from radar.modules.classification.geo import is_in_scope
from radar.modules.expansion.autocomplete import AutocompleteExpander, Suggestion
from radar.modules.ingestion.seeds import SEED_KEYWORDS, SeedKeyword, seeds_by_volume
from radar.modules.ingestion.store import KeywordStore
from radar.modules.scoring.assessment import (
    DEFAULT_RISING_SCORE,
    DEFAULT_TREND_SCORE,
    KeywordAssessment,
    assess_keyword,
)
from radar.modules.scoring.scorer import SCORING_MODEL_VERSION
from radar.utils.text_processing import normalize_keyword

logger = logging.getLogger(__name__)

SOURCE_SEED = "seed"
DEFAULT_EXPAND_TOP_SEEDS = 8
DEFAULT_SEED_CONCURRENCY = 2
DEFAULT_DISCOVERED_VOLUME = 100


class IngestionState(str, Enum):
    IDLE = "idle"
    SEEDING = "seeding"
    EXPANDING = "expanding"
    SCORING = "scoring"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class IngestionSummary:
    """Counts reported at the end of a run (or attached to an abort)."""

    seeded: int = 0
    expanded: int = 0
    refreshed: int = 0
    skipped: int = 0
    failed: int = 0
    model_version: str = SCORING_MODEL_VERSION

    @property
    def total(self) -> int:
        return self.seeded + self.expanded

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total"] = self.total
        return data


@dataclass
class Candidate:
    """A keyword on its way through one run."""

    keyword: str
    bucket: str
    source: str
    volume: int
    is_seed: bool
    assessment: Optional[KeywordAssessment] = None
    exists: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IngestionOrchestrator:
    """Run one ingestion pass against the keyword store.

    Usage::

        orchestrator = IngestionOrchestrator(store=KeywordStore(), expander=expander)
        summary = await orchestrator.run()
        print(summary.to_dict())
    """

    def __init__(
        self,
        store: Optional[KeywordStore] = None,
        expander: Optional[AutocompleteExpander] = None,
        expand_top_seeds: int = DEFAULT_EXPAND_TOP_SEEDS,
        seed_concurrency: int = DEFAULT_SEED_CONCURRENCY,
        discovered_volume: int = DEFAULT_DISCOVERED_VOLUME,
        trend_score: float = DEFAULT_TREND_SCORE,
        rising_score: float = DEFAULT_RISING_SCORE,
        clock: Optional[Callable[[], datetime]] = None,
        month: Optional[int] = None,
    ):
        self._store = store or KeywordStore()
        self._expander = expander
        self._expand_top_seeds = max(0, expand_top_seeds)
        self._seed_concurrency = max(1, seed_concurrency)
        self._discovered_volume = discovered_volume
        self._trend_score = trend_score
        self._rising_score = rising_score
        self._clock = clock or _utcnow
        self._month = month
        self.state = IngestionState.IDLE

    def _enter(self, state: IngestionState) -> None:
        logger.debug("Ingestion state: %s -> %s", self.state.value, state.value)
        self.state = state

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def run(
        self,
        seeds: Optional[Iterable[SeedKeyword]] = None,
        expand: bool = True,
    ) -> IngestionSummary:
        """Execute one full pass and return its summary.

        Raises:
            StoreUnavailableError: If the store cannot be reached, either
                up front or part-way through persistence.
        """
        summary = IngestionSummary()
        seed_list = list(SEED_KEYWORDS if seeds is None else seeds)
        seen_at = self._clock()

        try:
            self._store.ping()
        except OperationalError as exc:
            self._enter(IngestionState.FAILED)
            logger.error("Keyword store unavailable, aborting ingestion: %s", exc)
            raise StoreUnavailableError(f"Keyword store unavailable: {exc}", summary) from exc

        self._enter(IngestionState.SEEDING)
        candidates = self._seed_candidates(seed_list)
        logger.info("Seeding: %d unique seeds", len(candidates))

        self._enter(IngestionState.EXPANDING)
        if expand and self._expander is not None and self._expand_top_seeds:
            known = {c.keyword for c in candidates}
            for candidate in await self._expand(seed_list):
                if candidate.keyword in known:
                    continue
                known.add(candidate.keyword)
                candidates.append(candidate)

        self._enter(IngestionState.SCORING)
        to_persist = self._score(candidates, summary)

        self._enter(IngestionState.PERSISTING)
        self._persist(to_persist, summary, seen_at)

        self._enter(IngestionState.DONE)
        logger.info(
            "Ingestion complete: seeded=%d expanded=%d refreshed=%d skipped=%d failed=%d (model %s)",
            summary.seeded, summary.expanded, summary.refreshed,
            summary.skipped, summary.failed, summary.model_version,
        )
        return summary

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _seed_candidates(self, seeds: list[SeedKeyword]) -> list[Candidate]:
        candidates: list[Candidate] = []
        seen: set[str] = set()
        for seed in seeds:
            keyword = normalize_keyword(seed.keyword)
            if not keyword or keyword in seen:
                continue
            seen.add(keyword)
            candidates.append(Candidate(
                keyword=keyword,
                bucket=seed.bucket,
                source=SOURCE_SEED,
                volume=max(0, int(seed.estimated_volume)),
                is_seed=True,
            ))
        return candidates

    async def _expand(self, seeds: list[SeedKeyword]) -> list[Candidate]:
        top = seeds_by_volume(seeds, self._expand_top_seeds)
        semaphore = asyncio.Semaphore(self._seed_concurrency)

        async def expand_one(seed: SeedKeyword) -> list[Suggestion]:
            async with semaphore:
                return await self._expander.expand(seed.keyword)

        results = await asyncio.gather(*(expand_one(s) for s in top), return_exceptions=True)

        candidates: list[Candidate] = []
        for seed, result in zip(top, results):
            if isinstance(result, BaseException):
                logger.warning("Expansion failed for seed %r: %s", seed.keyword, result)
                continue
            for suggestion in result:
                candidates.append(Candidate(
                    keyword=suggestion.keyword,
                    bucket=seed.bucket,
                    source=suggestion.source,
                    volume=self._discovered_volume,
                    is_seed=False,
                ))
        logger.info("Expansion: %d seeds -> %d discoveries", len(top), len(candidates))
        return candidates

    def _score(self, candidates: list[Candidate], summary: IngestionSummary) -> list[Candidate]:
        scored: list[Candidate] = []
        for candidate in candidates:
            # Out-of-scope seeds are stored for audit; out-of-scope discoveries are dropped.
            if not candidate.is_seed and not is_in_scope(candidate.keyword):
                summary.skipped += 1
                continue
            try:
                candidate.exists = self._store.get(candidate.keyword) is not None
            except OperationalError as exc:
                self._abort(summary, exc)
            except SQLAlchemyError as exc:
                logger.warning("Lookup failed for %r: %s", candidate.keyword, exc)
                summary.failed += 1
                continue
            if not candidate.exists:
                candidate.assessment = assess_keyword(
                    candidate.keyword,
                    candidate.volume,
                    candidate.bucket,
                    month=self._month,
                    trend_score=self._trend_score,
                    rising_score=self._rising_score,
                )
            scored.append(candidate)
        return scored

    def _persist(self, candidates: list[Candidate], summary: IngestionSummary, seen_at: datetime) -> None:
        for candidate in candidates:
            try:
                if candidate.exists:
                    volume = candidate.volume if candidate.is_seed else None
                    self._store.touch(candidate.keyword, volume=volume, seen_at=seen_at)
                    summary.refreshed += 1
                else:
                    self._store.insert(candidate.assessment.to_record(), source=candidate.source, seen_at=seen_at)
                    if not candidate.is_seed:
                        summary.expanded += 1
                if candidate.is_seed:
                    summary.seeded += 1
            except OperationalError as exc:
                self._abort(summary, exc)
            except SQLAlchemyError as exc:
                logger.warning("Persisting %r failed: %s", candidate.keyword, exc)
                summary.failed += 1

    def _abort(self, summary: IngestionSummary, exc: Exception) -> None:
        self._enter(IngestionState.FAILED)
        logger.error(
            "Keyword store became unavailable after seeded=%d expanded=%d: %s",
            summary.seeded, summary.expanded, exc,
        )
        raise StoreUnavailableError(f"Keyword store unavailable: {exc}", summary) from exc


async def run_ingestion(
    seeds: Optional[Iterable[SeedKeyword]] = None,
    config: Optional[dict] = None,
    expand: bool = True,
    store: Optional[KeywordStore] = None,
    client=None,
) -> IngestionSummary:
    """Build an orchestrator from ``config`` and run one pass.

    ``config`` is the parsed ``settings.yaml`` mapping (only the
    ``autocomplete``, ``ingestion`` and ``scoring`` sections are read).
    When ``client`` is omitted a ``SuggestClient`` is created and closed
    around the run.
    """
    from radar.integrations.suggest_client import SuggestClient
    from radar.utils.rate_limiter import RequestLimiter

    config = config or {}
    ac_cfg = config.get("autocomplete", {})
    ing_cfg = config.get("ingestion", {})
    score_cfg = config.get("scoring", {})

    owns_client = client is None
    if owns_client:
        client = SuggestClient(
            url=ac_cfg.get("url", "https://suggestqueries.google.com/complete/search"),
            locale=ac_cfg.get("locale", "en"),
            country=ac_cfg.get("country", "us"),
            timeout=ac_cfg.get("timeout_seconds", 10),
        )
    batch_size = ac_cfg.get("batch_size", 8)
    limiter = RequestLimiter(
        max_concurrency=batch_size,
        requests_per_minute=ac_cfg.get("requests_per_minute"),
        name="autocomplete",
    )
    expander = AutocompleteExpander(
        client,
        limiter=limiter,
        batch_size=batch_size,
        geo_token=ac_cfg.get("geo_token", "austin"),
    )
    orchestrator = IngestionOrchestrator(
        store=store,
        expander=expander,
        expand_top_seeds=ing_cfg.get("expand_top_seeds", DEFAULT_EXPAND_TOP_SEEDS),
        seed_concurrency=ing_cfg.get("seed_concurrency", DEFAULT_SEED_CONCURRENCY),
        discovered_volume=ing_cfg.get("discovered_volume", DEFAULT_DISCOVERED_VOLUME),
        trend_score=score_cfg.get("trend_score", DEFAULT_TREND_SCORE),
        rising_score=score_cfg.get("rising_score", DEFAULT_RISING_SCORE),
    )
    try:
        return await orchestrator.run(seeds, expand=expand)
    finally:
        if owns_client:
            await client.close()
