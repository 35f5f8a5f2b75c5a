"""Ingestion module -- seed list, keyword store, and the ingestion run."""

from radar.modules.ingestion.seeds import BUCKETS, SEED_KEYWORDS, SeedKeyword
from radar.modules.ingestion.store import KeywordStore
from radar.modules.ingestion.orchestrator import (
    IngestionOrchestrator,
    IngestionState,
    IngestionSummary,
    run_ingestion,
)

__all__ = [
    "BUCKETS",
    "SEED_KEYWORDS",
    "SeedKeyword",
    "KeywordStore",
    "IngestionOrchestrator",
    "IngestionState",
    "IngestionSummary",
    "run_ingestion",
]
