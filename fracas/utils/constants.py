"""Game configuration constants."""

# Owner sentinel for cells no player controls
UNOWNED = -1

# Grid
MIN_GRID_SIZE = 5  # Smaller configured dimensions are raised to this
MAX_GRID_SIZE = 50  # Largest grid the HTTP API will build
MAX_PLAYERS = 16  # Per seat kind (human or AI) for games created over HTTP

# Default settings
DEFAULT_GRID_WIDTH = 10
DEFAULT_GRID_HEIGHT = 10
DEFAULT_HUMAN_PLAYERS = 1
DEFAULT_AI_PLAYERS = 3
DEFAULT_INITIAL_MONEY = 10
DEFAULT_INITIAL_TROOPS_PER_CAPITAL = 5
DEFAULT_TROOPS_PER_TURN = 3
DEFAULT_MONEY_PER_CAPITAL = 2
DEFAULT_CAPITAL_COST = 15
DEFAULT_TROOP_COST = 1

# Combat multipliers (defender is favored at equal troop counts)
ATTACK_MULTIPLIER_RANGE = (0.8, 1.2)
DEFENSE_MULTIPLIER_RANGE = (1.0, 1.5)
FAILED_ATTACK_LOSS_RATE = 0.7  # Share of attacking troops lost on a failed attack
FAILED_DEFENSE_LOSS_RATE = 0.3  # Share of defending troops lost repelling an attack

# Player display colours, assigned by player id
PLAYER_COLORS = (
    "#EF5350",  # Red
    "#42A5F5",  # Blue
    "#66BB6A",  # Green
    "#FFEE58",  # Yellow
    "#8D6E63",  # Brown
    "#9575CD",  # Purple
)

# Fallback board used when a game cannot be initialized
FALLBACK_GRID_SIZE = 10
FALLBACK_PLAYER_COUNT = 4
FALLBACK_TROOPS = 5
FALLBACK_MONEY = 10
