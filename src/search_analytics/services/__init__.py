"""Business logic services."""

from search_analytics.services.session import generate_session_id
from search_analytics.services.tracking import TrackingAPI
from search_analytics.services.behavior_score import calculate_behavior_score, score_label
from search_analytics.services.tips import generate_tips
from search_analytics.services.insights import InsightsService, default_search_insights

__all__ = [
    "generate_session_id",
    "TrackingAPI",
    "calculate_behavior_score",
    "score_label",
    "generate_tips",
    "InsightsService",
    "default_search_insights",
]
