#!/usr/bin/env python3
"""
Service Catalog - Category keywords, cost ranges and default complexity.

The catalog is data, loaded from YAML, so categories can be tuned without
touching the scoring code. It also provides the keyword-based service
detection used whenever upstream project analysis gave no service list.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from servicematch.matcher.models import JobSpecification

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "service_categories.yaml"
FALLBACK_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryProfile:
    name: str
    keywords: Tuple[str, ...] = ()
    cost_min: float = 0.0
    cost_max: float = 0.0
    default_complexity: int = 5


@dataclass
class ServiceCatalog:
    """Lookup table of service categories."""
    categories: Dict[str, CategoryProfile] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ServiceCatalog":
        """Load the catalog from YAML (packaged default when path is None)."""
        catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceCatalog":
        categories = {}
        for name, entry in (data.get("categories") or {}).items():
            entry = entry or {}
            cost = entry.get("cost_range") or {}
            complexity = int(entry.get("default_complexity", 5))
            if not 1 <= complexity <= 10:
                logger.warning(f"Category {name}: default_complexity {complexity} outside 1..10, clamping")
                complexity = max(1, min(10, complexity))
            categories[name] = CategoryProfile(
                name=name,
                keywords=tuple(str(k).strip().lower() for k in entry.get("keywords") or [] if str(k).strip()),
                cost_min=float(cost.get("min", 0)),
                cost_max=float(cost.get("max", 0)),
                default_complexity=complexity,
            )
        logger.debug(f"Loaded service catalog with {len(categories)} categories")
        return cls(categories=categories)

    def _profile(self, category: Optional[str]) -> Optional[CategoryProfile]:
        if not category:
            return None
        profile = self.categories.get(category)
        if profile is not None:
            return profile
        key = category.strip().lower()
        for name, candidate in self.categories.items():
            if name.lower() == key:
                return candidate
        return None

    def keywords_for(self, category: Optional[str]) -> Tuple[str, ...]:
        profile = self._profile(category)
        return profile.keywords if profile else ()

    def cost_range_for(self, category: Optional[str]) -> Optional[Tuple[float, float]]:
        profile = self._profile(category)
        if profile is None:
            return None
        return profile.cost_min, profile.cost_max

    def default_complexity_for(self, category: Optional[str]) -> int:
        profile = self._profile(category) or self._profile(FALLBACK_CATEGORY)
        return profile.default_complexity if profile else 5

    def detect_services(self, text: Optional[str]) -> Tuple[str, ...]:
        """Catalog keywords present in text, in catalog order, deduplicated."""
        if not text:
            return ()
        lowered = text.lower()
        found: List[str] = []
        for profile in self.categories.values():
            for keyword in profile.keywords:
                if keyword not in found and re.search(rf"\b{re.escape(keyword)}\b", lowered):
                    found.append(keyword)
        return tuple(found)

    def detect_categories(self, text: Optional[str]) -> Tuple[str, ...]:
        """Categories with at least one keyword present in text."""
        detected = set(self.detect_services(text))
        matched = tuple(
            name for name, profile in self.categories.items()
            if detected.intersection(profile.keywords)
        )
        return matched or (FALLBACK_CATEGORY,)

    def infer_services(self, job: JobSpecification) -> Tuple[str, ...]:
        """
        Service keywords a job needs.

        Uses the upstream analysis when present, otherwise keyword detection
        on the description, otherwise the category name itself.
        """
        if job.detected_services:
            return tuple(dict.fromkeys(s.strip().lower() for s in job.detected_services if s and s.strip()))

        detected = self.detect_services(job.description)
        if detected:
            return detected

        if job.category:
            return (job.category.strip().lower(),)
        return ()
