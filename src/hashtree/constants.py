"""
Hash Tree Constants

This module contains the constants shared by the hash tree, the proof
implementation and the command-line tool.
"""

# ====================
# Digest Defaults
# ====================

# Digest algorithm used when neither the caller nor the environment picks one
DEFAULT_ALGORITHM = "md5"

# Encoding used to turn text items into digest input bytes
DEFAULT_ENCODING = "utf-8"

# Variable-length hashlib algorithms cannot produce fixed-width digests
VARIABLE_LENGTH_ALGORITHMS = frozenset({"shake_128", "shake_256"})

# ====================
# Tree Queries
# ====================

# Returned by index lookups when no leaf matches
NOT_FOUND = -1

# Proof step digest meaning "no sibling at this level, re-hash alone"
EMPTY_DIGEST = ""

# ====================
# Display
# ====================

# Number of leading/trailing hex characters kept when shortening digests
DIGEST_PREVIEW_CHARS = 8

# Default number of leaves listed by the inspect command
DEFAULT_INSPECT_LIMIT = 10
