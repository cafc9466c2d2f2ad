"""Application-wide constants for the highlight dashboard."""

from __future__ import annotations

# Opacity policy
HIGHLIGHTED_ALPHA = 1.0
UNHIGHLIGHTED_ALPHA = 0.2

# Dropdown label meaning "no series selected"
NONE_CHOICE = "None"

# Long-format dataset columns
X_FIELD = "rowid"
Y_FIELD = "value"
SERIES_FIELD = "name"

# Click resolution threshold in pixels
CLICK_THRESHOLD_PX = 20.0

# Simulation defaults
DEFAULT_N_OBSERVATIONS = 50
DEFAULT_N_SERIES = 30
DEFAULT_OFFDIAG = 0.95

# Offdiagonal correlation for the clickable and the mirrored panel
PRIMARY_OFFDIAG = 0.2
SECONDARY_OFFDIAG = 0.8

# Labels
X_LABEL = "Time"
Y_LABEL = "Value"
LEGEND_TITLE = "Series"
WINDOW_TITLE = "Series Highlighter"

# Window sizing
MAX_WINDOW_WIDTH = 1400
MAX_WINDOW_HEIGHT = 1000
