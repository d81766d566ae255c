"""Package‑wide constants."""

# Canvas geometry used by every view
DEFAULT_CANVAS_WIDTH = 400
DEFAULT_CANVAS_HEIGHT = 400
PIXELS_PER_UNIT = 20

# Scoring
CORRECT_POINTS = 10

# Puzzle ranges (inclusive); the x pools keep both points near the origin
SECRET_A_RANGE = (-4, 4)
SECRET_B_RANGE = (-3, 3)
FIRST_X_POOL = (-1, 0, 1)
SECOND_X_POOL = (-2, -1, 0, 1)

# Hint retrieval
DEFAULT_HINT_MODEL = "gpt-4o-mini"
DEFAULT_HINT_TIMEOUT = 5.0

FALLBACK_HINTS: dict[str, str] = {
    "en": "Hint: re-check how you compute slope 'a' and the y-intercept 'b'.",
    "vi": "Gợi ý: Hãy kiểm tra lại cách tính hệ số góc 'a' và điểm cắt trục tung 'b'.",
}
FALLBACK_HINT = FALLBACK_HINTS["en"]

SUPPORTED_LOCALES = ("en", "vi")

# Drawing palette (pixel space)
GRID_COLOR = "#f0f0f0"
AXIS_COLOR = "#333333"
LINE_COLOR = "#4a90e2"
SECRET_LINE_COLOR = (139 / 255, 92 / 255, 246 / 255, 0.2)
POINT_COLOR = "#dc3545"
POINT_RADIUS = 5

__all__ = [
    "DEFAULT_CANVAS_WIDTH",
    "DEFAULT_CANVAS_HEIGHT",
    "PIXELS_PER_UNIT",
    "CORRECT_POINTS",
    "SECRET_A_RANGE",
    "SECRET_B_RANGE",
    "FIRST_X_POOL",
    "SECOND_X_POOL",
    "DEFAULT_HINT_MODEL",
    "DEFAULT_HINT_TIMEOUT",
    "FALLBACK_HINTS",
    "FALLBACK_HINT",
    "SUPPORTED_LOCALES",
    "GRID_COLOR",
    "AXIS_COLOR",
    "LINE_COLOR",
    "SECRET_LINE_COLOR",
    "POINT_COLOR",
    "POINT_RADIUS",
]
