"""Search insights: patterns and dashboard data joined, plus derived scoring."""

import asyncio

import structlog

from search_analytics.exceptions import AuthRequiredError
from search_analytics.schemas import (
    BehaviorInsights,
    DashboardInsights,
    SearchInsights,
    SearchPattern,
)
from search_analytics.services.behavior_score import calculate_behavior_score, score_label
from search_analytics.services.tips import generate_tips
from search_analytics.services.tracking import TrackingAPI
from shared.constants import DEFAULT_ANALYSIS_DAYS

logger = structlog.get_logger()


def default_search_insights() -> SearchInsights:
    """Empty insights, used when the user is not signed in."""
    return SearchInsights(
        patterns=SearchPattern(),
        insights=DashboardInsights(),
        trending_searches=[],
    )


class InsightsService:
    """Builds search insights for the user profile."""

    def __init__(self, tracking: TrackingAPI):
        self.tracking = tracking

    async def get_search_insights(self, days: int = DEFAULT_ANALYSIS_DAYS) -> SearchInsights:
        """
        Fetch patterns and dashboard data concurrently and merge them.

        Both calls must succeed. If the join fails because no access token is
        available, empty default insights are returned instead; any other
        error propagates.
        """
        patterns_task = asyncio.create_task(self.tracking.get_patterns(days))
        dashboard_task = asyncio.create_task(self.tracking.get_dashboard(days))

        try:
            patterns, dashboard = await asyncio.gather(patterns_task, dashboard_task)
        except AuthRequiredError:
            logger.info("Authentication required for search insights, returning default data")
            return default_search_insights()

        return SearchInsights(
            patterns=patterns.patterns,
            insights=dashboard.insights,
            trending_searches=dashboard.trending_searches,
        )

    async def get_behavior_insights(self, days: int = DEFAULT_ANALYSIS_DAYS) -> BehaviorInsights:
        """Search insights with the behavior score, its label and tips."""
        insights = await self.get_search_insights(days)
        score = calculate_behavior_score(insights.patterns)

        logger.debug(
            "Behavior insights computed",
            days=days,
            behavior_score=score,
            total_searches=insights.patterns.total_searches,
        )

        return BehaviorInsights(
            behavior_score=score,
            score_label=score_label(score),
            tips=generate_tips(insights.patterns),
            patterns=insights.patterns,
            insights=insights.insights,
            trending_searches=insights.trending_searches,
        )
