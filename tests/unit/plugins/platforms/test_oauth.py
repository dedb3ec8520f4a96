"""Tests for the OAuth refresh-token exchange."""

from __future__ import annotations

from urllib.parse import parse_qs

import httpx
import pytest

from tubepilot.core.models.config import PlatformConfig
from tubepilot.core.models.entities import Credential
from tubepilot.plugins.platforms.oauth import GoogleTokenRefresher
from tubepilot.plugins.platforms.youtube_api import PlatformAPIError

CONFIG = PlatformConfig(client_id="client-id", client_secret="client-secret")
CREDENTIAL = Credential(access_token="old-access", refresh_token="1//refresh")


def refresher_for(handler) -> GoogleTokenRefresher:
    return GoogleTokenRefresher(CONFIG, transport=httpx.MockTransport(handler))


class TestGoogleTokenRefresher:
    """Tests for GoogleTokenRefresher.refresh."""

    @pytest.mark.asyncio
    async def test_refresh_posts_form(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"access_token": "new-access", "expires_in": 3599})

        refreshed = await refresher_for(handler).refresh(CREDENTIAL)

        assert refreshed == Credential("new-access", "1//refresh")
        request = requests[0]
        assert str(request.url) == "https://oauth2.googleapis.com/token"
        form = parse_qs(request.content.decode())
        assert form == {
            "client_id": ["client-id"],
            "client_secret": ["client-secret"],
            "refresh_token": ["1//refresh"],
            "grant_type": ["refresh_token"],
        }

    @pytest.mark.asyncio
    async def test_rotated_refresh_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"access_token": "new", "refresh_token": "1//rotated"})

        refreshed = await refresher_for(handler).refresh(CREDENTIAL)

        assert refreshed.refresh_token == "1//rotated"

    @pytest.mark.asyncio
    async def test_rejected_grant(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "invalid_grant"})

        with pytest.raises(PlatformAPIError) as exc_info:
            await refresher_for(handler).refresh(CREDENTIAL)

        assert exc_info.value.status_code == 400
        assert exc_info.value.reason == "invalid_grant"

    @pytest.mark.asyncio
    async def test_requires_client_credentials(self):
        refresher = GoogleTokenRefresher(PlatformConfig())

        with pytest.raises(PlatformAPIError, match="client_id"):
            await refresher.refresh(CREDENTIAL)

    @pytest.mark.asyncio
    async def test_requires_refresh_token(self):
        refresher = refresher_for(lambda request: httpx.Response(200, json={}))

        with pytest.raises(PlatformAPIError, match="refresh token"):
            await refresher.refresh(Credential("access", ""))

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(PlatformAPIError, match="timed out"):
            await refresher_for(handler).refresh(CREDENTIAL)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={}),
            httpx.Response(200, json={"access_token": ""}),
            httpx.Response(200, json={"access_token": 42}),
            httpx.Response(200, json=["new-access"]),
            httpx.Response(200, text="<html>Sign in</html>"),
        ],
    )
    async def test_unusable_token_response(self, response: httpx.Response):
        with pytest.raises(PlatformAPIError, match="access_token") as exc_info:
            await refresher_for(lambda request: response).refresh(CREDENTIAL)

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [httpx.Response(400, json=["invalid_grant"]), httpx.Response(503, text="Service Unavailable")],
    )
    async def test_rejection_with_unexpected_body(self, response: httpx.Response):
        with pytest.raises(PlatformAPIError, match="rejected") as exc_info:
            await refresher_for(lambda request: response).refresh(CREDENTIAL)

        assert exc_info.value.status_code == response.status_code
        assert exc_info.value.reason is None
