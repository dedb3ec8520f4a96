"""Core module - models, interfaces and the engagement pipeline."""
