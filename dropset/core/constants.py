"""Application constants."""

# Plate increments used when rounding suggested weights
KG_INCREMENT = 2.5
LBS_INCREMENT = 5.0

# Dropset suggestion: fractions of the working weight
DROPSET_FIRST_RATIO = 0.8
DROPSET_SECOND_RATIO = 0.6

# Consistency grid (daily volume tiers)
CONSISTENCY_WINDOW_DAYS = 35
CONSISTENCY_LOW_MAX_VOLUME = 5000
CONSISTENCY_MEDIUM_MAX_VOLUME = 10000

# Trailing windows
DEFAULT_VOLUME_WINDOW_DAYS = 30
DEFAULT_SUMMARY_WINDOW_DAYS = 30

# Limit streak scans to the last ~14 months
STREAK_LOOKBACK_DAYS = 430

# Muscle XP: earned per non-warm-up set, one level per XP_PER_LEVEL
XP_PER_SET = 10
XP_PER_LEVEL = 100

# Weekly challenges (Monday-start week): targets and reward points
WEEKLY_WORKOUTS_TARGET = 5
WEEKLY_WORKOUTS_REWARD = 100
WEEKLY_REPS_TARGET = 200
WEEKLY_REPS_REWARD = 50
STREAK_CHALLENGE_TARGET = 3
STREAK_CHALLENGE_REWARD = 75
