"""Topic processing API route."""

from __future__ import annotations

import hmac
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tubepilot.api.schemas import (
    MISSING_TOPIC,
    PROCESSING_ERROR,
    UNAUTHORIZED,
    ProcessRequest,
    ProcessResponse,
)
from tubepilot.core.models.entities import Credential, TopicRequest

logger = structlog.get_logger(__name__)
router = APIRouter()

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=UNAUTHORIZED.model_dump())


def _check_api_key(request: Request, authorization: HTTPAuthorizationCredentials | None) -> None:
    """Reject callers without the configured bearer key.

    With no key configured every request is refused.
    """
    api_config = request.app.state.config.api
    if not api_config.auth_enabled:
        logger.warning("[API] No API key configured, refusing request")
        raise _unauthorized()

    supplied = authorization.credentials if authorization else ""
    if not hmac.compare_digest(supplied.encode(), api_config.key.encode()):
        logger.info("[API] Authentication failed, missing or invalid API key")
        raise _unauthorized()


async def _resolve_credential(request: Request, email: str | None) -> Credential:
    """Look up the caller's stored tokens, refreshing them when configured."""
    if not email:
        logger.info("[API] Authentication failed, no user header")
        raise _unauthorized()

    state = request.app.state
    credential = state.credential_store.get_credential(email)
    if credential is None or not credential.is_complete:
        logger.info("[API] User not found or no access token", email=email)
        raise _unauthorized()

    platform_config = state.config.platform
    if platform_config.refresh_on_request and platform_config.can_refresh:
        try:
            credential = await state.token_refresher.refresh(credential)
            state.credential_store.update_tokens(email, credential)
        except Exception as e:
            logger.warning("[API] Token refresh failed, using stored token", email=email, error=str(e))

    return credential


async def _read_topic(request: Request) -> str:
    """Extract the topic from the JSON body; anything unusable counts as missing."""
    payload: Any = None
    if await request.body():
        try:
            payload = await request.json()
        except ValueError:
            logger.info("[API] Request body is not JSON")
    if not isinstance(payload, dict):
        return ""
    return (ProcessRequest.model_validate(payload).topic or "").strip()


@router.post(
    "/process",
    response_model=ProcessResponse,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ProcessRequest.model_json_schema()}},
        }
    },
)
async def process_topic(
    request: Request,
    authorization: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    x_user_email: Annotated[str | None, Header()] = None,
) -> ProcessResponse:
    """Run the engagement pipeline for a topic on behalf of the caller.

    Blocks until the run finishes; per-video failures are only logged.
    """
    logger.info("[API] Received process request", email=x_user_email)
    _check_api_key(request, authorization)
    credential = await _resolve_credential(request, x_user_email)

    topic = await _read_topic(request)
    if not topic:
        logger.info("[API] Missing topic", email=x_user_email)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_TOPIC.model_dump())

    state = request.app.state
    try:
        result = await state.pipeline_runner(credential, TopicRequest(topic=topic), state.config)
    except Exception as e:
        logger.error("[API] Processing failed", topic=topic, error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PROCESSING_ERROR.model_dump(),
        ) from e

    return ProcessResponse(outcome=result.outcome.value)
