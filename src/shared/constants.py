"""Shared constants across the application."""

# Identifies this client on tracked searches
CLIENT_IDENTIFIER = "Eco-Lens Mobile App"

# Legacy storage keys for the access token, checked in order
AUTH_TOKEN_KEYS = (
    "@eco_lens_auth_token",
    "@eco_lens_token",
)

# Search analytics routes (relative to the search route prefix)
TRACK_SEARCH_ROUTE = "/track-search"
TRACK_CLICK_ROUTE = "/track-click"
PATTERNS_ROUTE = "/patterns"
RECOMMENDATIONS_ROUTE = "/recommendations"
DASHBOARD_ROUTE = "/dashboard"
SUGGESTIONS_ROUTE = "/suggestions"
CLEAR_HISTORY_ROUTE = "/clear-history"

# Default limits
DEFAULT_ANALYSIS_DAYS = 30
DEFAULT_RECOMMENDATION_LIMIT = 20
DEFAULT_SUGGESTION_LIMIT = 5
MIN_SUGGESTION_QUERY_LENGTH = 2

# Sustainability grades counted as eco-friendly
ECO_GRADES = ("A", "B")

# Behavior score caps and per-unit points: (cap, points)
ACTIVITY_SCORE = (30, 2)
DIVERSITY_SCORE = (20, 3)
ECO_FOCUS_SCORE = (25, 5)
MATERIAL_AWARENESS_SCORE = (15, 2)
BRAND_AWARENESS_SCORE = (10, 1)
MAX_BEHAVIOR_SCORE = 100

# Behavior score tiers, highest first
SCORE_LABELS = [
    (80, "Eco Expert"),
    (60, "Eco Enthusiast"),
    (40, "Eco Learner"),
    (0, "Getting Started"),
]

# Tips are suggested until the user has searched this many times
EXPLORATION_SEARCH_THRESHOLD = 5
