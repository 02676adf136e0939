# leadforge/pipeline.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from .config import Settings
from .dedupe import dedupe_leads
from .discovery import RateLimitPolicy, date_restrict_for, make_search_client, page_start
from .dorks import build_queries, dork_preview
from .enrichment import LeadEnricher
from .errors import SearchProviderError
from .extraction import extract_lead
from .logger import get_logger
from .types import (
    Lead,
    LeadGenerationResult,
    PlatformReport,
    QueryOutcome,
    SearchCriteria,
    StageStatus,
)

logger = get_logger(__name__)


def passes_requirements(lead: Lead, criteria: SearchCriteria) -> bool:
    if criteria.email_required and not lead.email:
        return False
    if criteria.phone_required and not lead.phone:
        return False
    return True


class LeadGenerator:
    """
    Platforms -> queries -> pages -> results, one call at a time.

    A failed query or platform is recorded in the report and the run moves on;
    only configuration errors abort (and they do so before any request).
    """

    def __init__(
        self,
        settings: Settings,
        search_client=None,
        enricher: Optional[LeadEnricher] = None,
        policy: Optional[RateLimitPolicy] = None,
        mode: str = "simplified",
    ):
        self.settings = settings
        self.mode = mode
        self.policy = policy or RateLimitPolicy.from_settings(settings)
        self._search_client = search_client
        if enricher is None and settings.enrichment_available:
            enricher = LeadEnricher(settings, policy=self.policy)
        self.enricher = enricher

    @property
    def search_client(self):
        if self._search_client is None:
            self._search_client = make_search_client(self.settings)
        return self._search_client

    def preview(self, criteria: SearchCriteria) -> str:
        return dork_preview(criteria, mode=self.mode)

    def _run_query(self, query: str, criteria: SearchCriteria, platform: str, sink: List[Lead]) -> QueryOutcome:
        outcome = QueryOutcome(query=query)
        date_restrict = date_restrict_for(criteria.time_range)

        for page in range(criteria.max_pages):
            if page > 0:
                self.policy.wait("page")
            try:
                results = self.search_client.search(query, start=page_start(page), date_restrict=date_restrict)
            except SearchProviderError as exc:
                logger.error(f"[{platform}] page {page + 1} failed for {query!r}: {exc}")
                outcome.error = str(exc)
                outcome.status = StageStatus.PARTIAL if outcome.pages_fetched else StageStatus.FAILURE
                return outcome

            outcome.pages_fetched += 1
            outcome.results_seen += len(results)
            logger.info(f"[{platform}] page {page + 1} returned {len(results)} results")
            if not results:
                break

            for item in results:
                lead = extract_lead(item, criteria, platform, enricher=self.enricher)
                if lead is None or not passes_requirements(lead, criteria):
                    continue
                sink.append(lead)
                outcome.leads += 1

        outcome.status = StageStatus.SUCCESS if outcome.results_seen else StageStatus.EMPTY
        return outcome

    def _run_platform(self, criteria: SearchCriteria, platform: str, sink: List[Lead]) -> PlatformReport:
        report = PlatformReport(platform=platform)
        before = len(sink)
        try:
            report.queries = build_queries(criteria, platform, mode=self.mode)
            for i, query in enumerate(report.queries):
                if i > 0:
                    self.policy.wait("query")
                logger.info(f"[{platform}] query: {query}")
                report.outcomes.append(self._run_query(query, criteria, platform, sink))
        except Exception as exc:
            # keep whatever this platform gathered; the next one still runs
            logger.exception(f"[{platform}] aborted: {exc}")
            report.error = str(exc)
        report.count = len(sink) - before
        return report

    def generate(self, criteria: SearchCriteria) -> LeadGenerationResult:
        self.settings.require_search_credentials()
        logger.info(f"Lead generation started for platforms: {', '.join(criteria.target_platforms)}")

        all_leads: List[Lead] = []
        platform_results = {}
        for i, platform in enumerate(criteria.target_platforms):
            if i > 0:
                self.policy.wait("platform")
            report = self._run_platform(criteria, platform, all_leads)
            platform_results[platform] = report
            logger.info(f"[{platform}] {report.count} leads ({report.status.value})")

        unique = dedupe_leads(all_leads)
        unique.sort(key=lambda l: l.score, reverse=True)
        logger.info(f"Lead generation finished: {len(unique)} unique of {len(all_leads)} leads")

        queries = [q for r in platform_results.values() for q in r.queries]
        return LeadGenerationResult(
            leads=unique,
            total_count=len(unique),
            search_criteria=criteria,
            generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            dork_query=" | ".join(queries),
            platform_results=platform_results,
        )
