"""Top-level confloader commands (one module per command)."""
