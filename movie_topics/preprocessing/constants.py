"""Constants for input loading and text normalization."""

# ===========================
# Input Data
# ===========================
DEFAULT_ID_COLUMN = "Title"
"""Column holding the movie name"""

DEFAULT_TEXT_COLUMN = "Plot"
"""Column holding the plot summary"""

# ===========================
# Normalization
# ===========================
DEFAULT_STOPWORD_LANGUAGE = "english"

DEFAULT_MIN_TOKEN_LENGTH = 1
"""Tokens shorter than this are dropped (1 keeps everything)"""
