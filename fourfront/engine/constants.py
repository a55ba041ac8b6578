# fourfront/engine/constants.py

# --- Scoring System ---
# Logic: terminal score = WIN_SCORE + depth remaining
# Win found with 3 plies of search left = +1003
# Loss found with 3 plies of search left = -1003
WIN_SCORE = 1000

# Per-cell bonus for owning the middle column
CENTER_WEIGHT = 5

# Streak weights (length -> weight), only when at least one end is open
STREAK_COMPLETE = 100
STREAK_WEIGHTS = {3: 50, 2: 10, 1: 1}

# Bounds for alpha-beta windows; larger than any reachable score
SCORE_INF = 10 ** 9

# --- Mistake Model ---
MAX_TEMPERATURE = 12.0

# Returned by the AI when the board has no open column
NO_MOVE = -1
