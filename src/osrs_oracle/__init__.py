"""OSRS Oracle: Gemini-backed assistant for Old School RuneScape."""

__version__ = "0.1.0"
