"""Application constants."""

# Planned sets assumed for a session exercise without a target
DEFAULT_TARGET_SETS = 3

# Consistency score: 100 - stddev(day gaps) * factor, clamped to [0, 100]
CONSISTENCY_STDDEV_FACTOR = 10.0
CONSISTENCY_MAX = 100.0

# Trailing window for workouts-per-week
FREQUENCY_WINDOW_DAYS = 7

# Default trailing window for the workout stats summary
STATS_WINDOW_DAYS = 30

# Limit streak scan to last ~14 months
STREAK_LOOKBACK_DAYS = 430

DEFAULT_SESSION_NAME = "Custom Workout"

# Set difficulty (RPE-style) bounds
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5

# Width of exercise_id columns; longer free-form ids are rejected up front
MAX_EXERCISE_ID_LENGTH = 64
