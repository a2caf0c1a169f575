"""Keyword match type switcher: convert keyword lists between broad, phrase and exact notation."""

__version__ = "0.1.0"
