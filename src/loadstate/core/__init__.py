"""Pure Python loading core with no Qt dependency."""
