GRID_SIZE = 8

# Opaque color identifiers; presentation maps them to actual colors.
DEFAULT_PALETTE = (
    'blue',
    'red',
    'green',
    'orange',
    'purple',
    'pink',
    'cyan',
    'lime',
)

# ============================================================================
# SCORING
# ============================================================================
MIN_REGION_SIZE = 3
# Fewer colors than this keep cascading on any grid that can hold a region.
MIN_PALETTE_SIZE = 4
POINTS_PER_TILE = 10
COMBO_BONUS_PER_LEVEL = 50

# ============================================================================
# MODES
# ============================================================================
DEFAULT_TIME_LIMIT_SECONDS = 60
DEFAULT_MOVE_LIMIT = 20
DEFAULT_TIMEATTACK_TARGET = 1500
DEFAULT_MOVECHALLENGE_TARGET = 1000

# Upper bound on passes for a headless settle loop before giving up.
MAX_SETTLE_PASSES = 500
