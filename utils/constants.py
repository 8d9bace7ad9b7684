# =========================
# ONE-EURO FILTER
# =========================
ONE_EURO_FREQ       = 30.0
ONE_EURO_MIN_CUTOFF = 1.0
ONE_EURO_BETA       = 0.007
ONE_EURO_D_CUTOFF   = 1.0

# =========================
# GESTURE CLASSIFIER
# =========================
PINCH_DISTANCE          = 0.05   # thumb tip ↔ index tip
FIST_CURL_THRESHOLD     = 0.08   # tip ↔ MCP below this = curled
POINT_EXTEND_THRESHOLD  = 0.15   # tip ↔ MCP above this = extended
GESTURE_DEBOUNCE_FRAMES = 3

# Swipe (palm velocity over the last SWIPE_SAMPLES samples)
PALM_HISTORY_LEN         = 10    # ~300ms at 30fps
SWIPE_SAMPLES            = 5
SWIPE_VELOCITY_THRESHOLD = 1.2   # normalized units / second
SWIPE_VERTICAL_RATIO     = 0.7   # |vy| must stay below this * |vx|
SWIPE_CONFIDENCE         = 0.9
SWIPE_COOLDOWN           = 1.5   # seconds

# =========================
# PHYSICS
# =========================
REPEL_RADIUS     = 2.0
REPEL_STRENGTH   = 0.15
REPEL_MIN_DIST   = 1e-6
DAMP_LAMBDA      = 4.0
SELECT_DISTANCE  = 0.5

# Colour feedback rates (per frame)
HIGHLIGHT_RATE   = 0.1
RESTORE_RATE     = 0.05
HIGHLIGHT_GAIN   = 1.2
DIM_GAIN         = 0.3
SCALE_FADE_RATE  = 0.1

# =========================
# SCENE / LAYOUT
# =========================
SCENE_SCALE = 4.0

CENTRAL_RADIUS      = SCENE_SCALE * 0.9
STAR_EDGE_WEIGHT    = 0.8

CLUSTER_RADIUS      = SCENE_SCALE * 0.7
CLUSTER_SPREAD      = SCENE_SCALE * 0.35
INTRA_CLUSTER_K     = 3
INTRA_EDGE_WEIGHT   = 0.7
BRIDGE_EDGE_WEIGHT  = 0.3
BRIDGE_SAMPLE_SIZE  = 10
CLUSTER_LABEL_LIFT  = 0.8   # × spread, above the cluster centre
CLUSTER_LABEL_COLOR = "#00ffa3"

DISTRIBUTED_K       = 4
MAX_EDGE_LABELS     = 40
EDGE_LABEL_CHARS    = 12

TOPOLOGY_TRANSITION = 1.2   # seconds before committing a new layout

# =========================
# PARTICLE DEFAULTS
# =========================
EMISSIVE_MULTIPLIER = 2.5
DEFAULT_RGB         = (0.702, 0.533, 1.0)   # violet #b388ff
HUB_RGB             = (0.0, 1.0, 0.639)     # #00ffa3
DEFAULT_SIZE        = 0.04
SIZE_RANGE          = (0.02, 0.08)
DEFAULT_SCALE       = 1.0

# d3 schemeTableau10
TABLEAU10 = (
    "#4e79a7", "#f28e2c", "#e15759", "#76b7b2", "#59a14f",
    "#edc949", "#af7aa1", "#ff9da7", "#9c755f", "#bab0ab",
)

# =========================
# CAMERA / TRACKING
# =========================
HAND_TRACKING_FPS = 30
WEBCAM_WIDTH      = 640
WEBCAM_HEIGHT     = 480
CAMERA_POSITION   = (0.0, 0.0, 8.0)
CAMERA_FOV        = 50.0
