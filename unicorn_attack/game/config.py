# --- Display ---
SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
FPS = 60
WINDOW_TITLE = "Unicorn Attack"
MAX_TIMESTEP = 1.0 / 30.0   # clamp frame stalls (sec)
FPS_WINDOW_S = 0.5          # fps counter refresh period (sec)

# --- Units ---
SCALE = 32                                  # px per standardized unit
VIEWPORT_HEIGHT_UNITS = SCREEN_HEIGHT / SCALE

# --- World / Physics ---
GRAVITY = 15.0              # units/s^2, suppressed while boosting
BASE_SPEED = 2.0            # AUTO mode: dx = BASE_SPEED + time
FALL_LIMIT_Y = -20.0        # headless env only: below this the rider is lost

# --- Rider ---
RIDER_W = 2                 # standardized
RIDER_H = 1
RIDER_W_PX = RIDER_W * SCALE
RIDER_H_PX = RIDER_H * SCALE
SPAWN_X = 0.0
SPAWN_Y = 3.0

# --- Control ---
RISE_SPEED = 10.0           # dy set by a rise intent
MANUAL_STEP = 2.0           # dx delta per left/right intent
MAX_MANUAL_SPEED = 20.0     # |dx| clamp in MANUAL mode
BOOST_DURATION = 1.0        # boost_remaining set by a boost intent
BOOST_SPEED_MULT = 2.0
BOOST_DECAY_PER_TICK = 0.02

# --- Level generation ---
LEVEL_DEFAULT = "levels/lvl1.txt"
LEVEL_LENGTH = 400.0        # units of track produced by the generator
START_PLATFORM_W = 16.0
SEGMENT_MIN_W = 6.0
SEGMENT_MAX_W = 18.0
GAP_MIN_W = 2.0
GAP_MAX_W = 6.0
TOP_MIN_Y = -2.0
TOP_MAX_Y = 4.0
MAX_STEP_UP = 2.0           # max rise of a top between consecutive segments
WALL_CHANCE = 0.15
WALL_W = 2.0
WALL_H = 3.0
PLATFORM_H = 1.0

# --- Colors (RGB) ---
COLOR_BG = (255, 255, 255)
COLOR_RIDER = (255, 0, 0)
COLOR_PLAT_FILL = (253, 185, 200)
COLOR_PLAT_EDGE = (0, 0, 0)
COLOR_HUD = (0, 0, 0)
COLOR_PANEL = (40, 60, 90)
COLOR_PANEL_EDGE = (90, 130, 180)
COLOR_PANEL_TEXT = (220, 235, 255)
