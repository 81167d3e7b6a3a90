GRID_ROWS = 8
GRID_COLS = 8

# Canonical tile palette (lucky Year-of-the-Horse theme).
TILE_TYPES = ('福', '🧧', '🐴', '🍀', '🎊', '🎉', '㊗️', '吉')
MIN_TILE_TYPES = 3

# Scoring
BASE_POINTS = 10          # per removed tile
BONUS_FOUR = 5            # added per tile when its run is exactly 4 long
BONUS_FIVE = 10           # replaces BONUS_FOUR when the run is 5 or longer
COMBO_MULTIPLIER = 0.5    # per combo level, applied as 1 + level * multiplier
COMBO_WINDOW_MS = 3000    # chains starting within this window of each other build combo

# Player assistance
SHUFFLE_QUOTA = 3
HINT_DELAY_MS = 10000

# Internal caps; exceeding either one is a defect, not a game state.
SHUFFLE_MAX_ATTEMPTS = 100
MAX_CASCADE_STEPS = 50
