"""Concrete platform and browser implementations."""
