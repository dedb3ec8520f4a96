"""Credential storage for signed-in users."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from tubepilot.core.models.entities import Credential, mask_token

logger = structlog.get_logger(__name__)


class CredentialStore:
    """File-backed storage of OAuth tokens keyed by user e-mail.

    Stores one record per user in a JSON file:
    ``{"email": {"access_token", "refresh_token", "full_name", "updated_at"}}``.

    The file is shared between the API server and CLI invocations, so every
    read reloads it and every write is a load-modify-save of the whole file.
    """

    def __init__(self, config_dir: Path | str = "data/config") -> None:
        """Initialize credential store.

        Args:
            config_dir: Directory to store the users file
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._credentials_file = self.config_dir / "users.json"
        self._cache: dict[str, dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        """Load credentials from file."""
        if self._credentials_file.exists():
            try:
                content = self._credentials_file.read_text()
                self._cache = json.loads(content) if content.strip() else {}
                logger.debug("Loaded user credentials", users=len(self._cache))
            except Exception as e:
                logger.error("Failed to load credentials", error=str(e))
                self._cache = {}
        else:
            self._cache = {}

    def _save(self) -> None:
        """Save credentials to file."""
        try:
            self._credentials_file.write_text(json.dumps(self._cache, indent=2, default=str))
            logger.debug("Saved user credentials")
        except Exception as e:
            logger.error("Failed to save credentials", error=str(e))
            raise

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def save(
        self,
        email: str,
        access_token: str,
        refresh_token: str,
        full_name: str = "",
    ) -> None:
        """Create or replace the record for a user.

        Args:
            email: User e-mail
            access_token: OAuth access token
            refresh_token: OAuth refresh token
            full_name: Display name
        """
        key = self._key(email)
        self._load()
        record = self._cache.get(key, {})
        record.update(
            {
                "access_token": access_token,
                "refresh_token": refresh_token,
                "full_name": full_name or record.get("full_name", ""),
                "updated_at": datetime.now(UTC).isoformat(),
            }
        )
        self._cache[key] = record
        self._save()
        logger.info("Saved credentials", email=key, access_token=mask_token(access_token))

    def update_tokens(self, email: str, credential: Credential) -> None:
        """Replace the tokens of an existing user."""
        self._load()
        if self._key(email) not in self._cache:
            raise KeyError(f"Unknown user: {email}")
        self.save(email, credential.access_token, credential.refresh_token)

    def get(self, email: str) -> dict[str, Any] | None:
        """Get the raw record for a user.

        Returns:
            Record dictionary or None if not found
        """
        self._load()
        return self._cache.get(self._key(email))

    def get_credential(self, email: str) -> Credential | None:
        """Get the tokens of a user as a Credential.

        Returns:
            Credential, or None if the user is unknown or has no access token
        """
        record = self.get(email)
        if not record or not record.get("access_token"):
            return None
        return Credential(
            access_token=record["access_token"],
            refresh_token=record.get("refresh_token", ""),
        )

    def remove(self, email: str) -> bool:
        """Remove a user.

        Returns:
            True if removed, False if not found
        """
        key = self._key(email)
        self._load()
        if key in self._cache:
            del self._cache[key]
            self._save()
            logger.info("Removed credentials", email=key)
            return True
        return False

    def list_users(self) -> list[str]:
        """List all stored user e-mails."""
        self._load()
        return list(self._cache.keys())
