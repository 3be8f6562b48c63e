"""
Integrations registry and OAuth callback router
"""
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from loguru import logger

from app.config import settings
from app.schemas.integrations import (
    IntegrationActionRequest,
    IntegrationConnectResponse,
    IntegrationListResponse,
    IntegrationMessageResponse,
    IntegrationUpdateRequest,
)
from app.services import integration_registry, oauth_service
from app.services.service_manager import get_connection_store
from app.services.stores import ConnectionStore
from app.utils import utc_now_iso


router = APIRouter(prefix="/api/integrations", tags=["integrations"])


@router.get("", response_model=IntegrationListResponse)
async def list_integrations(
    status: Optional[str] = None,
    type: Optional[str] = None,
    store: ConnectionStore = Depends(get_connection_store),
):
    """
    List supported integrations merged with their connection status

    Args:
        status: Optional status filter (applied to the merged status)
        type: Optional integration type filter
        store: Connection store dependency
    """
    try:
        integrations = integration_registry.merge_status(
            integration_registry.supported_integrations(),
            store.status_map(),
        )
        if status:
            integrations = [i for i in integrations if i.status == status]
        if type:
            integrations = [i for i in integrations if i.type == type]

        return IntegrationListResponse(
            integrations=integrations,
            total=len(integrations),
            connected=sum(1 for i in integrations if i.status == "connected"),
            available=sum(1 for i in integrations if i.status == "available"),
        )
    except Exception as e:
        logger.error(f"Error fetching integrations: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch integrations")


@router.post("")
async def initiate_integration(
    payload: IntegrationActionRequest,
    store: ConnectionStore = Depends(get_connection_store),
):
    """Start the OAuth flow for an integration, or disconnect it"""
    if not payload.integration_id:
        raise HTTPException(status_code=400, detail="integration_id is required")

    integration = integration_registry.find_integration(payload.integration_id)
    if integration is None:
        raise HTTPException(status_code=404, detail="Integration not found")

    try:
        if payload.action == "disconnect":
            store.disconnect(integration.id)
            return IntegrationMessageResponse(
                message=f"{integration.name} has been disconnected",
                integration_id=integration.id,
            )

        if integration.type == "oauth2" and integration.oauth_config:
            state = integration_registry.generate_state_token(integration.id)
            auth_url = integration_registry.build_oauth_url(integration.oauth_config, state)
            store.store_oauth_state(state, integration.id)

            logger.info(f"Initiating OAuth flow for {integration.name}")
            return IntegrationConnectResponse(
                auth_url=auth_url,
                integration_id=integration.id,
                state=state,
                message=f"Initiating OAuth flow for {integration.name}",
            )
    except Exception as e:
        logger.error(f"Error initiating integration: {e}")
        raise HTTPException(status_code=500, detail="Failed to initiate integration")

    raise HTTPException(status_code=400, detail="Integration type not supported for this action")


@router.put("", response_model=IntegrationMessageResponse)
async def update_integration(
    payload: IntegrationUpdateRequest,
    store: ConnectionStore = Depends(get_connection_store),
):
    """Update the configuration of an integration"""
    if not payload.integration_id:
        raise HTTPException(status_code=400, detail="integration_id is required")

    integration = integration_registry.find_integration(payload.integration_id)
    if integration is None:
        raise HTTPException(status_code=404, detail="Integration not found")

    try:
        store.update_config(integration.id, payload.config, payload.settings)
    except Exception as e:
        logger.error(f"Error updating integration: {e}")
        raise HTTPException(status_code=500, detail="Failed to update integration")

    return IntegrationMessageResponse(
        message=f"{integration.name} configuration updated successfully",
        integration_id=integration.id,
    )


def _redirect_to_ui(**params: str) -> RedirectResponse:
    return RedirectResponse(url=f"{settings.APP_BASE_URL}/integrations?{urlencode(params)}")


@router.get("/callback/{platform}")
async def oauth_callback(
    platform: str,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    store: ConnectionStore = Depends(get_connection_store),
):
    """
    OAuth redirect target. Always answers with a redirect to the integrations page.

    Args:
        platform: Callback slug of the provider
        code: Authorization code
        state: State token issued when the flow was started
        error: Error reported by the provider
        store: Connection store dependency
    """
    try:
        if error:
            logger.error(f"OAuth error for {platform}: {error}")
            return _redirect_to_ui(error=error, platform=platform)

        if not code or not state:
            return _redirect_to_ui(error="missing_parameters", platform=platform)

        if not integration_registry.validate_state_token(state, platform):
            logger.warning(f"Invalid OAuth state for {platform}")
            return _redirect_to_ui(error="invalid_state", platform=platform)

        tokens = await oauth_service.exchange_code_for_token(platform, code)
        if not isinstance(tokens, dict) or not tokens.get("access_token"):
            return _redirect_to_ui(error="token_exchange_failed", platform=platform)

        integration_id = integration_registry.integration_id_for_slug(platform)
        store.store_tokens(integration_id, tokens)

        test_result = await oauth_service.check_integration_connection(platform, tokens["access_token"])

        now = utc_now_iso()
        store.mark_connected(integration_id, {
            "connected_at": now,
            "last_sync": now,
            "test_result": test_result,
        })

        logger.success("Integration connected", platform=platform, test_success=test_result.get("success"))
        return _redirect_to_ui(success="true", platform=platform, connected="true")

    except Exception as e:
        logger.error(f"OAuth callback error for {platform}: {e}")
        return _redirect_to_ui(error="unexpected_error", platform=platform)
