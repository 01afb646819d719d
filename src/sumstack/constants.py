GRID_ROWS = 10
GRID_COLS = 6
INITIAL_ROWS = 3

TARGET_MIN = 10
TARGET_MAX = 25
BLOCK_MIN = 1
BLOCK_MAX = 9

TIME_MODE_INTERVAL_MS = 8000  # one injected row per interval in timed mode
TICK_INTERVAL_MS = 100        # host scheduler granularity
CLEAR_DELAY_MS = 300          # matched tiles stay visible this long before removal
BIG_CLEAR_THRESHOLD = 4
POINTS_PER_TILE = 10

HIGH_SCORE_KEY = "sumstack-highscore"

WINDOW_WIDTH = 480
WINDOW_HEIGHT = 800
WINDOW_TITLE = "SumStack"

# Board footprint relative to window; header band sits above the board.
HEADER_HEIGHT = 120
BOTTOM_MARGIN = 20
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.95
TILE_GAP = 6

TIMER_WARNING_MS = 3000
