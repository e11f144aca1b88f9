"""Core evaluation primitives."""
