"""Top-level depvendor commands."""
