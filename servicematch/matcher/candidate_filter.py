#!/usr/bin/env python3
"""
Candidate Filter - Narrow the provider pool before scoring.

A provider is a candidate when it matches the job's category (or, softly,
its services), is within reach of the job site, and passes the caller's
filter overrides. Input order is preserved.
"""
from typing import List, Optional, Sequence
import logging

from servicematch.catalog import ServiceCatalog
from servicematch.exceptions import InvalidCoordinate
from servicematch.geo.distance import within_radius
from servicematch.matcher.models import (
    FilterOverrides,
    JobSpecification,
    ProviderRecord,
)
from servicematch.scorer.components import effective_radius_km, services_overlap

logger = logging.getLogger(__name__)


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()


class CandidateFilter:
    """
    Stateless provider filter.

    Args:
        catalog: Service catalog used to infer the job's service keywords
    """

    def __init__(self, catalog: Optional[ServiceCatalog] = None):
        self.catalog = catalog or ServiceCatalog.load()

    def filter(
        self,
        job: JobSpecification,
        providers: Sequence[ProviderRecord],
        overrides: Optional[FilterOverrides] = None
    ) -> List[ProviderRecord]:
        overrides = overrides or FilterOverrides()
        category = overrides.category or job.category
        job_services = self.catalog.infer_services(job)

        candidates = []
        for provider in providers:
            if not self._category_ok(provider, category, job_services):
                continue
            if not self._location_ok(provider, job):
                continue
            if overrides.verified_only and not provider.is_verified:
                continue
            if overrides.min_rating is not None and provider.rating.average < overrides.min_rating:
                continue
            if overrides.municipality and not _same(provider.municipality, overrides.municipality):
                continue
            candidates.append(provider)

        logger.debug(f"Candidate filter kept {len(candidates)}/{len(providers)} providers")
        return candidates

    @staticmethod
    def _category_ok(provider: ProviderRecord, category: Optional[str], job_services) -> bool:
        if not category:
            return True
        if _same(provider.category, category):
            return True
        return services_overlap(provider, job_services)

    @staticmethod
    def _location_ok(provider: ProviderRecord, job: JobSpecification) -> bool:
        if job.location is None:
            return True
        if provider.location is None:
            return False
        try:
            return within_radius(job.location, provider.location, effective_radius_km(provider, job))
        except InvalidCoordinate as e:
            logger.warning(f"Skipping provider {provider.provider_id}: invalid coordinates ({e})")
            return False
