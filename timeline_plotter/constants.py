"""
Constants for the Event Timeline Plotter.

Centralises the canvas geometry, axis and tick settings, scale padding,
event-marker styling, chart colours, the dark GUI palette and the
export settings.
"""

# ── CSV column names ─────────────────────────────────────────────────────
COL_DATE = "date"
COL_VALUE = "value"
COL_EVENT = "event"

DEFAULT_DATA_FILE = "data.csv"

# ── Canvas geometry (logical pixels) ─────────────────────────────────────
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 400
CANVAS_DPI = 100
MARGINS = {'top': 50, 'right': 60, 'bottom': 50, 'left': 60}

# ── Scales and axes ──────────────────────────────────────────────────────
# Fixed vertical padding of the value domain.  Applied to the raw extremes
# even when they are negative, which makes the padding asymmetric.
Y_DOMAIN_PAD_LOW = 0.9
Y_DOMAIN_PAD_HIGH = 1.1

TICK_COUNT = 6
TICK_SIZE = 6
TICK_PADDING = 3
TICK_FONT_SIZE = 12
DATE_TICK_FORMAT = "%m/%d/%Y"

# Points sampled per interval when flattening the monotone curve
CURVE_SAMPLES_PER_SEGMENT = 16

# ── Event annotation ─────────────────────────────────────────────────────
EVENT_MARKER_RADIUS = 5
EVENT_LABEL_OFFSET_EVEN = -15
EVENT_LABEL_OFFSET_ODD = 20
EVENT_CONNECTOR_GAP = 5
EVENT_FONT_SIZE = 12

# ── Chart colours (light chart on every surface) ─────────────────────────
CHART_COLORS = {
    'background':     '#fafafa',
    'border':         '#cccccc',
    'line':           '#8884d8',
    'grid':           '#e0e0e0',
    'axis':           '#000000',
    'tick_text':      '#000000',
    'event':          'red',
    'title':          '#333333',
    'no_data_text':   '#666666',
}

LINE_WIDTH = 2
GRID_DASH = (3, 3)
CONNECTOR_DASH = (2, 2)
CONNECTOR_WIDTH = 1

# ── Font family fallback chain ──────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark Catppuccin-inspired GUI colour palette ──────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'accent':       '#89b4fa',
    'border':       '#45475a',
    'selection':    '#45475a',
}

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 300
CLIPBOARD_DPI = 150

# ── Loading ──────────────────────────────────────────────────────────────
HTTP_TIMEOUT_SECONDS = 10.0
MAX_DIAGNOSTIC_EXAMPLES = 10
LOADING_TEXT = "Loading data..."
