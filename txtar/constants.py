from __future__ import annotations


# Marker line delimiters: "-- NAME --"
MARKER = "-- "
MARKER_END = " --"
NEWLINE_MARKER = "\n" + MARKER

# Shortest line that can hold both delimiters without overlap
MIN_MARKER_LEN = len(MARKER) + len(MARKER_END)

ENCODING = "utf-8"
