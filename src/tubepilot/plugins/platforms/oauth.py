"""OAuth2 refresh-token exchange for Google accounts."""

from __future__ import annotations

import httpx
import structlog

from tubepilot.core.models.config import PlatformConfig
from tubepilot.core.models.entities import Credential, mask_token
from tubepilot.plugins.platforms.youtube_api import PlatformAPIError, json_object

logger = structlog.get_logger(__name__)


class GoogleTokenRefresher:
    """Exchanges a refresh token for a fresh access token."""

    def __init__(
        self,
        config: PlatformConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or PlatformConfig()
        self._transport = transport

    async def refresh(self, credential: Credential) -> Credential:
        """Refresh an access token.

        Args:
            credential: Credential carrying the refresh token

        Returns:
            New credential; keeps the old refresh token unless a new one is issued

        Raises:
            PlatformAPIError: Missing client credentials or a rejected exchange
        """
        if not self.config.can_refresh:
            raise PlatformAPIError("OAuth client_id and client_secret are not configured")
        if not credential.refresh_token:
            raise PlatformAPIError("Credential has no refresh token")

        payload = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "refresh_token": credential.refresh_token,
            "grant_type": "refresh_token",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self.config.token_uri, data=payload)
        except httpx.HTTPError as e:
            raise PlatformAPIError(f"Token refresh failed: {e}") from e

        if response.is_error:
            error = PlatformAPIError.from_response(response)
            logger.error(
                "[OAUTH] Token refresh rejected",
                status_code=error.status_code,
                reason=error.reason,
            )
            raise PlatformAPIError(
                "Token refresh rejected",
                status_code=error.status_code,
                reason=error.reason,
            )

        data = json_object(response) or {}
        access_token = data.get("access_token")
        if not access_token or not isinstance(access_token, str):
            logger.error("[OAUTH] Token response without access_token", status_code=response.status_code)
            raise PlatformAPIError(
                "Token response missing access_token",
                status_code=response.status_code,
            )
        refresh_token = data.get("refresh_token")
        if not refresh_token or not isinstance(refresh_token, str):
            refresh_token = credential.refresh_token
        refreshed = Credential(access_token=access_token, refresh_token=refresh_token)
        logger.info("[OAUTH] Access token refreshed", access_token=mask_token(refreshed.access_token))
        return refreshed
