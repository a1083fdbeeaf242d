"""Weighted job similarity graph with interaction-driven ranking."""

__version__ = "0.1.0"
