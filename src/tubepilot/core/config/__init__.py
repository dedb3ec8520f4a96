"""Credential storage."""

from tubepilot.core.config.credentials import CredentialStore

__all__ = ["CredentialStore"]
