"""Keys recognised in model configuration files."""

# Resample grid
GRID_KEY = "grid"
START_KEY = "start"
STOP_KEY = "stop"
STEP_KEY = "step"

# Plotting
PLOT_KEY = "plot"
ENABLED_KEY = "enabled"
X_LABEL_KEY = "x_label"
Y_LABEL_KEY = "y_label"

# Serial number detection
SERIAL_PATTERN_KEY = "serial_pattern"

TOP_LEVEL_KEYS = frozenset({GRID_KEY, PLOT_KEY, SERIAL_PATTERN_KEY})
GRID_KEYS = frozenset({START_KEY, STOP_KEY, STEP_KEY})
PLOT_KEYS = frozenset({ENABLED_KEY, X_LABEL_KEY, Y_LABEL_KEY})
