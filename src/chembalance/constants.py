"""Shared constants for the balancer."""

from __future__ import annotations

import numpy as np

DEFAULT_MAX_COEFFICIENT = 20

# Absolute tolerance on coefficient ratios when comparing two solutions.
RATIO_TOLERANCE = 1e-9

# Largest count a trailing digit run may denote.
MAX_ENTITY_COUNT = int(np.iinfo(np.int32).max)

# Standard element symbols are at most two characters long.
SUSPICIOUS_SYMBOL_LENGTH = 3

# Upper bound on the number of trailing-column combinations evaluated at once.
TAIL_BLOCK_SIZE = 65536

# Largest absolute value any intermediate sum of the search may reach.
MAX_INT64 = int(np.iinfo(np.int64).max)
