"""Framework adapters for betterlog."""
