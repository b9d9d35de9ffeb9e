#!/usr/bin/env python3
"""
Match Insights - Summaries attached to a ranked match set, plus the
market overview of a provider pool.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Sequence, Tuple

from servicematch.matcher.models import ProviderRecord
from servicematch.scorer.models import MatchResult

MarketHealth = Literal["limited", "good", "excellent"]
CompetitionLevel = Literal["low", "medium", "high"]

NO_MATCHES_SUMMARY = "No qualified providers found for this project."
NO_MATCHES_SUGGESTIONS = (
    "Expand search criteria",
    "Consider adjusting budget",
    "Break project into phases",
)


@dataclass(frozen=True)
class MatchInsights:
    average_score: int = 0
    market_health: MarketHealth = "limited"
    summary: str = NO_MATCHES_SUMMARY
    top_recommendation: Optional[str] = None
    insights: Tuple[str, ...] = ()
    suggestions: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "averageScore": self.average_score,
            "marketHealth": self.market_health,
            "summary": self.summary,
            "topRecommendation": self.top_recommendation,
            "insights": list(self.insights),
            "suggestions": list(self.suggestions),
        }


@dataclass(frozen=True)
class MatchSet:
    """Ranked outcome of one match request."""
    job_id: Optional[str]
    matches: Tuple[MatchResult, ...] = ()
    insights: MatchInsights = field(default_factory=MatchInsights)
    total_analyzed: int = 0
    total_candidates: int = 0
    qualified_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.job_id,
            "matches": [m.to_dict() for m in self.matches],
            "insights": self.insights.to_dict(),
            "totalAnalyzed": self.total_analyzed,
            "totalCandidates": self.total_candidates,
            "qualifiedCount": self.qualified_count,
        }


def market_health(qualified_count: int) -> MarketHealth:
    if qualified_count >= 5:
        return "excellent"
    if qualified_count >= 3:
        return "good"
    return "limited"


def empty_insights() -> MatchInsights:
    return MatchInsights(
        average_score=0,
        market_health="limited",
        summary=NO_MATCHES_SUMMARY,
        suggestions=NO_MATCHES_SUGGESTIONS,
    )


def build_insights(matches: Sequence[MatchResult], qualified_scores: Sequence[int]) -> MatchInsights:
    """
    Insights for a ranked, truncated match list.

    Count, health and average describe the whole qualified set, not the
    truncated list.

    Args:
        matches: Returned matches, best first
        qualified_scores: Overall scores of every match at or above the
            threshold, before truncation
    """
    if not matches or not qualified_scores:
        return empty_insights()

    top = matches[0]
    qualified_count = len(qualified_scores)
    average = int(round(sum(qualified_scores) / qualified_count))
    lines = []
    if top.match_reason:
        lines.append(f"Best match: {top.match_reason}")
    lines.append(f"Average provider score: {average}%")
    lines.append(f"Success probability: {top.success_probability}%")

    return MatchInsights(
        average_score=average,
        market_health=market_health(qualified_count),
        summary=f"Found {qualified_count} qualified providers. Top match has {top.overall_score}% compatibility.",
        top_recommendation=top.recommendation,
        insights=tuple(lines),
    )


def competition_level(total: int) -> CompetitionLevel:
    if total > 10:
        return "high"
    if total > 5:
        return "medium"
    return "low"


def market_overview(providers: Sequence[ProviderRecord]) -> Dict[str, Any]:
    """Aggregate view of a provider pool."""
    total = len(providers)
    rated = [p.rating.average for p in providers]
    return {
        "totalProviders": total,
        "verifiedProviders": sum(1 for p in providers if p.is_verified),
        "averageRating": round(sum(rated) / total, 2) if total else 0.0,
        "categories": len({p.category.strip().lower() for p in providers if p.category}),
        "municipalities": len({p.municipality.strip().lower() for p in providers if p.municipality}),
        "competitionLevel": competition_level(total),
    }
