"""Condition evaluation and block routing."""
