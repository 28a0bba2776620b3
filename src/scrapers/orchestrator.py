from __future__ import annotations
"""Capa de orquestación del harvest de reacciones.

Encapsula:
 - Puerta de autenticación (SessionProvider)
 - Harvest de una sola pasada: abrir lista -> scroll hasta agotar -> extraer
 - Entrega de los registros al OutputSink

Errores de adquisición (sesión, contenedor, lista vacía) se propagan; el
presupuesto de scroll agotado y los fallos de escritura quedan en el reporte.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import time

from src.scrapers.errors import ErrorCode, ScrapeError
from src.scrapers.linkedin.config import LinkedInConfig, PLATFORM
from src.scrapers.linkedin.reactions import FIELD_ORDER, harvest_with_stats
from src.scrapers.scrolling import ScrollPhase, ScrollStats
from src.scrapers.types import ReactionRecord
from src.services.session_provider import SessionProvider
from src.utils.exceptions import PersistenceFailureException
from src.utils.output import OutputSink
from src.utils.url import is_linkedin_post_url

logger = logging.getLogger(__name__)


@dataclass
class HarvestReport:
    records: List[ReactionRecord]
    scroll: ScrollStats
    output_path: Optional[str] = None
    errors: List[ScrapeError] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def complete(self) -> bool:
        return self.scroll.exhausted

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": len(self.records),
            "outcome": self.scroll.outcome.value,
            "scroll_attempts": self.scroll.attempts,
            "output_path": self.output_path,
            "errors": [e.to_dict() for e in self.errors],
            "duration_ms": self.duration_ms,
        }


class HarvestOrchestrator:
    def __init__(self, session_provider: SessionProvider, sink: OutputSink, config: LinkedInConfig) -> None:
        self.session_provider = session_provider
        self.sink = sink
        self.config = config

    # ---------------------------- Public API ---------------------------------
    async def run(self) -> HarvestReport:
        started = time.time()
        await self.session_provider.await_authentication(self.config.auth_timeout_ms)
        page = self.session_provider.current_document()
        if not is_linkedin_post_url(self.config.post_url):
            logger.warning(f"harvest.config post_url_unexpected url={self.config.post_url!r} expected a LinkedIn post URL")

        records, stats = await harvest_with_stats(page, self.config)
        report = HarvestReport(records=records, scroll=stats)
        if stats.outcome is ScrollPhase.ABORTED_AT_BUDGET:
            report.errors.append(ScrapeError(
                code=ErrorCode.ABORTED_AT_BUDGET,
                message=f"Scroll budget of {self.config.max_scroll_attempts} attempts reached",
                platform=PLATFORM,
                phase='scroll',
            ))
        report.errors.extend(self._field_miss_errors(records))

        report.output_path = self._persist(records, report)
        report.duration_ms = int((time.time() - started) * 1000)
        logger.info(f"harvest.done records={len(records)} outcome={stats.outcome.value} output={report.output_path} duration_ms={report.duration_ms}")
        return report

    # ---------------------------- Internals ----------------------------------
    def _field_miss_errors(self, records: List[ReactionRecord]) -> List[ScrapeError]:
        errors = []
        for name in FIELD_ORDER:
            missing = [r["index"] for r in records if not r[name]]
            if not missing:
                continue
            logger.info(f"harvest.extract error.code=FIELD_MISS field={name} records={len(missing)}")
            errors.append(ScrapeError(
                code=ErrorCode.FIELD_MISS,
                message=f"{len(missing)} of {len(records)} records without {name}",
                platform=PLATFORM,
                context=",".join(str(i) for i in missing[:20]),
                phase="extract",
                selector_category=f"fields.{name}",
            ))
        return errors

    def _persist(self, records: List[ReactionRecord], report: HarvestReport) -> Optional[str]:
        try:
            return self.sink.write(records)
        except PersistenceFailureException as e:
            logger.error(f"harvest.persist error.code=PERSISTENCE_FAILURE path={e.path} cause={e.cause}")
            report.errors.append(ScrapeError(
                code=ErrorCode.PERSISTENCE_FAILURE,
                message=str(e.cause),
                platform=PLATFORM,
                context=e.path,
                phase='persist',
            ))
            return None
