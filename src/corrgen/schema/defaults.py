"""
Default settings for generation runs and table import.
"""

DEFAULT_ROWS = 1000
DEFAULT_SEED = 42

DEFAULT_LOG_LEVEL = "info"
DEFAULT_OUTPUT_PATH = "output/"
DEFAULT_OUTPUT_SUFFIX = ".csv"

# Bounds given to variables that do not declare them, including every
# numeric column inferred from an imported CSV.
DEFAULT_MIN = 0.0
DEFAULT_MAX = 100.0

DEFAULT_TOKEN_LENGTH = 6
TOKEN_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

DEFAULT_INVALID_CORRELATION_MODE = "error"
DEFAULT_INVALID_BOUNDS_MODE = "error"
DEFAULT_CORRELATION_PASS = "unique"

INVALID_CORRELATION_MODES = ("error", "clamp")
INVALID_BOUNDS_MODES = ("error", "collapse")
CORRELATION_PASS_MODES = ("unique", "ordered")
LOG_LEVELS = ("info", "quiet")

IMPORT_SAMPLE_SIZE = 50
DISPLAY_DECIMALS = 2
FLOAT_DECIMALS = 2
