"""Personalized search tips derived from search patterns."""

from collections.abc import Mapping
from typing import Any

from search_analytics.schemas import SearchPattern, Tip, TipType
from search_analytics.services.behavior_score import as_pattern
from shared.constants import ECO_GRADES, EXPLORATION_SEARCH_THRESHOLD


def _most_frequent(frequency: dict[str, int]) -> str:
    # max() keeps the first-seen key on ties
    return max(frequency.items(), key=lambda item: item[1])[0]


def generate_tips(patterns: SearchPattern | Mapping[str, Any]) -> list[Tip]:
    """
    Build advisory tips from search patterns.

    Checks run in a fixed order (exploration, category, sustainability,
    materials) and every check that applies adds one tip.
    """
    pattern = as_pattern(patterns)
    tips: list[Tip] = []

    if pattern.total_searches < EXPLORATION_SEARCH_THRESHOLD:
        tips.append(
            Tip(
                type=TipType.EXPLORATION,
                message="Try searching for different product categories to discover more eco-friendly options!",
                icon="🔍",
            )
        )

    if pattern.category_frequency:
        top_category = _most_frequent(pattern.category_frequency)
        tips.append(
            Tip(
                type=TipType.CATEGORY,
                message=f"You seem to love {top_category} products! Check out our A-grade options in this category.",
                icon="⭐",
            )
        )

    if pattern.sustainability_grade_frequency:
        top_grade = _most_frequent(pattern.sustainability_grade_frequency)
        if top_grade in ECO_GRADES:
            tips.append(
                Tip(
                    type=TipType.SUSTAINABILITY,
                    message="Great job prioritizing sustainable products! Keep up the eco-friendly shopping!",
                    icon="🌱",
                )
            )
        else:
            tips.append(
                Tip(
                    type=TipType.SUSTAINABILITY,
                    message=(
                        "Consider looking for products with higher sustainability grades "
                        "(A or B) for better environmental impact."
                    ),
                    icon="🌍",
                )
            )

    # The top-ranked material can only be named if the server sent its name
    top_material = pattern.top_materials[0].material if pattern.top_materials else None
    if top_material:
        tips.append(
            Tip(
                type=TipType.MATERIALS,
                message=(
                    f"You frequently search for {top_material} products. "
                    f"Look for recycled or sustainable {top_material} options!"
                ),
                icon="♻️",
            )
        )

    return tips
