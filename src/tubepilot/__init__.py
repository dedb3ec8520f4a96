"""tubepilot - topic-driven YouTube engagement automation."""

__version__ = "0.1.0"
