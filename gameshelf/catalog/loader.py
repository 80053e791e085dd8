"""Seed the catalog: sample the Steam universe, fetch, normalize and store."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..logging_service import log_manager, new_correlation_id
from .errors import PersistenceError, RecordRejected, UniverseFetchError
from .fetcher import DetailFetcher
from .models import Game
from .normalizer import CatalogRow, normalize
from .sampler import sample

DEFAULT_TARGET_COUNT = 150


class CatalogSink(Protocol):
    def write(self, row: CatalogRow) -> None: ...


class DatabaseSink:
    """Insert catalog rows one transaction at a time.

    Each write commits or rolls back before returning, which hands the
    pooled connection back to the engine on every path.
    """

    def write(self, row: CatalogRow) -> None:
        try:
            db.session.add(Game(**row.to_dict()))
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(row.id, f"{exc.__class__.__name__}: {exc}") from exc


@dataclass
class SeedReport:
    """Counters describing one seeding run."""

    correlation_id: str
    universe: int = 0
    sampled: int = 0
    absent: int = 0
    rejected: int = 0
    accepted: int = 0
    written: int = 0
    failed: int = 0

    def summary(self) -> str:
        return (
            f"universe={self.universe} sampled={self.sampled} absent={self.absent}"
            f" rejected={self.rejected} accepted={self.accepted}"
            f" written={self.written} failed={self.failed}"
        )


class CatalogLoader:
    """Drive a seeding run from the app listing to persisted games."""

    def __init__(
        self,
        fetcher: DetailFetcher,
        sink: Optional[CatalogSink] = None,
        *,
        seed: str = "160",
        sample_size: int = 200,
    ) -> None:
        self.fetcher = fetcher
        self.sink = sink or DatabaseSink()
        self.seed_value = seed
        self.sample_size = sample_size

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **fetcher_overrides: Any) -> "CatalogLoader":
        """Build a loader and its fetcher from Flask configuration values."""

        return cls(
            DetailFetcher.from_config(config, **fetcher_overrides),
            seed=str(config.get("CATALOG_SEED", "160")),
            sample_size=int(config.get("CATALOG_SAMPLE_SIZE", 200)),
        )

    def seed(self, target_count: int = DEFAULT_TARGET_COUNT) -> int:
        """Seed up to ``target_count`` games and return how many were written."""

        return self.run(target_count).written

    def run(self, target_count: int = DEFAULT_TARGET_COUNT) -> SeedReport:
        """Seed the catalog and return the full run report.

        Only :class:`UniverseFetchError` escapes; every per-game failure is
        logged and skipped.
        """

        if target_count < 1:
            raise ValueError("target_count must be at least 1")

        report = SeedReport(correlation_id=new_correlation_id())
        self.fetcher.correlation_id = report.correlation_id

        try:
            universe = self.fetcher.fetch_universe()
        except UniverseFetchError as exc:
            log_manager.record(
                component="Seeding",
                action="fetch-universe",
                level="error",
                result="error",
                title="Catalog seeding aborted",
                user_summary="The Steam app list could not be loaded, so no games were added.",
                technical_details=f"{exc.__class__.__name__}: {exc}",
                correlation_id=report.correlation_id,
            )
            raise
        report.universe = len(universe)

        # Draw extra candidates; some will be absent or rejected.
        candidates = sample(universe, max(self.sample_size, target_count), self.seed_value)
        report.sampled = len(candidates)

        accepted: list[CatalogRow] = []
        seen_ids: set[int] = set()
        for entry, raw in self.fetcher.fetch_many(candidates):
            if raw is None:
                report.absent += 1
                continue
            try:
                row = normalize(raw, fallback_id=entry.id)
                if row.id in seen_ids:
                    raise RecordRejected("record duplicates an accepted app", row.id)
            except RecordRejected as exc:
                report.rejected += 1
                log_manager.record(
                    component="Seeding",
                    action="normalize",
                    level="info",
                    result="skipped",
                    title="Store record rejected",
                    user_summary=f"App {entry.id} ({entry.name or 'unnamed'}) is not a catalog game.",
                    technical_details=f"normalize rejected app {entry.id}: {exc.reason}",
                    correlation_id=report.correlation_id,
                )
                continue
            seen_ids.add(row.id)
            accepted.append(row)
            if len(accepted) >= target_count:
                break
        report.accepted = len(accepted)

        for row in accepted:
            try:
                self.sink.write(row)
            except PersistenceError as exc:
                report.failed += 1
                log_manager.record(
                    component="Seeding",
                    action="persist",
                    level="error",
                    result="skipped",
                    title="Game could not be saved",
                    user_summary=f"{row.name} was not added to the catalog.",
                    technical_details=str(exc),
                    correlation_id=report.correlation_id,
                )
            else:
                report.written += 1

        log_manager.record(
            component="Seeding",
            action="seed",
            level="info" if not report.failed else "warn",
            result="success" if not report.failed else "partial",
            title="Catalog seeding finished",
            user_summary=f"{report.written} of {target_count} requested games were added to the catalog.",
            technical_details=report.summary(),
            correlation_id=report.correlation_id,
        )
        return report
