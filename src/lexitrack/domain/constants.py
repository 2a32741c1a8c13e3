"""Centralized constants for lexitrack.

All scheduling and scoring thresholds live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
PASSING_QUALITY = 3
MAX_QUALITY = 5

# ---------- Word State ----------
DECAY_MIN_REPETITIONS = 4
DECAY_OVERDUE_DAYS = 14
MASTERED_MIN_REPETITIONS = 5
MASTERED_MIN_EASE = 2.3
MASTERED_MIN_INTERVAL = 21
STABILIZING_MIN_REPETITIONS = 3

# ---------- Personal Score ----------
SCORE_MIN = 0
SCORE_MAX = 100
DEFAULT_DICTIONARY_SCORE = 50
FAMILIARITY_BONUS_MAX = 15
FAMILIARITY_BONUS_WEIGHT = 5
MISTAKE_PENALTY_MAX = 10
DECAY_PENALTY_MAX = 8
DECAY_PENALTY_WEIGHT = 3

# ---------- Trend ----------
TREND_MIN_HISTORY = 4
TREND_WINDOW = 3
TREND_DEADBAND = 0.2

# ---------- Daily Plan ----------
DEFAULT_DAILY_PLAN_SIZE = 20

# ---------- Skill Profile ----------
SKILL_EMA_ALPHA = 0.15
SKILL_DELTA = 20
SKILL_SCORE_MIN = -100
SKILL_SCORE_MAX = 100
SKILL_WEAKNESS_THRESHOLD = -10
