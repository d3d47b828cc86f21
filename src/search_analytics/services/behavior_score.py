"""Search behavior score.

Summarizes engagement and sustainability focus as an integer from 0 to 100.
Each component is capped on its own before the components are summed:

- activity: 2 points per search, up to 30
- diversity: 3 points per distinct category, up to 20
- eco focus: 5 points per search filtered on grade A or B, up to 25
- material awareness: 2 points per ranked material, up to 15
- brand awareness: 1 point per ranked brand, up to 10
"""

from collections.abc import Mapping
from typing import Any

from search_analytics.schemas import SearchPattern
from shared.constants import (
    ACTIVITY_SCORE,
    BRAND_AWARENESS_SCORE,
    DIVERSITY_SCORE,
    ECO_FOCUS_SCORE,
    ECO_GRADES,
    MATERIAL_AWARENESS_SCORE,
    MAX_BEHAVIOR_SCORE,
    SCORE_LABELS,
)


def as_pattern(patterns: SearchPattern | Mapping[str, Any]) -> SearchPattern:
    """Accept a SearchPattern or a pattern-shaped mapping (camelCase or snake_case)."""
    if isinstance(patterns, SearchPattern):
        return patterns
    return SearchPattern.model_validate(patterns)


def _capped(count: int, rule: tuple[int, int]) -> int:
    cap, points = rule
    return min(cap, count * points)


def calculate_behavior_score(patterns: SearchPattern | Mapping[str, Any]) -> int:
    """Compute the 0-100 behavior score. Pure and deterministic."""
    pattern = as_pattern(patterns)

    eco_searches = sum(
        pattern.sustainability_grade_frequency.get(grade, 0) for grade in ECO_GRADES
    )

    score = (
        _capped(pattern.total_searches, ACTIVITY_SCORE)
        + _capped(len(pattern.category_frequency), DIVERSITY_SCORE)
        + _capped(eco_searches, ECO_FOCUS_SCORE)
        + _capped(len(pattern.top_materials), MATERIAL_AWARENESS_SCORE)
        + _capped(len(pattern.top_brands), BRAND_AWARENESS_SCORE)
    )

    return min(MAX_BEHAVIOR_SCORE, max(0, score))


def score_label(score: int) -> str:
    """Name the tier a behavior score falls in."""
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return SCORE_LABELS[-1][1]
