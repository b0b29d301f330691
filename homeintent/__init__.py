"""
Home Intent Dispatcher - natural-language control for a small home.

A raw instruction ("turn on the light in the kitchen") is turned into a
structured intent by an LLM, validated against a fixed device vocabulary,
authorized when the target is security-sensitive, and written to the
device-state store.
"""

__version__ = "0.1.0"
