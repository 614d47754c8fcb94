"""Global configuration and constants for report sorting."""

from __future__ import annotations

import os
from typing import Final

# Marker vocabulary (class tokens on host elements)
HEADER_MARKER: Final = "sort-head-"
ROW_MARKER: Final = "sort-row"
COLUMN_MARKER: Final = "sort-column-"
DATA_MARKER: Final = "sort-data"

DEFAULT_ORDER: Final = "asc"
DEFAULT_DATE_FORMAT: Final = os.environ.get("REPORTSORT_DATE_FORMAT", "DD/MM/YYYY")

# Blank dates sort as this fixed, ancient date
SENTINEL_DATE: Final = "01/01/1999"
SENTINEL_DATE_FORMAT: Final = "DD/MM/YYYY"

DEFAULT_ALTERNATING_MARKER: Final = "altReportRow"
DEFAULT_AFFORDANCE_MARKER: Final = "imgArrow"
DEFAULT_AFFORDANCE_LOADING_MARKER: Final = "imgArrowLoading"
AFFORDANCE_ID_PREFIX: Final = "imgColArrow_"

DEBOUNCE_MS: Final = int(os.environ.get("REPORTSORT_DEBOUNCE_MS", "100"))
