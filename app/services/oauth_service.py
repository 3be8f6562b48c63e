"""
OAuth code exchange and connection testing against provider endpoints
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import requests
from loguru import logger

from app.config import settings
from app.services.integration_registry import callback_uri
from app.utils import utc_now_iso


TOKEN_URLS: Dict[str, str] = {
    "salesforce": "https://login.salesforce.com/services/oauth2/token",
    "microsoft365": "https://login.microsoftonline.com/common/oauth2/v2.0/token",
    "google": "https://oauth2.googleapis.com/token",
    "slack": "https://slack.com/api/oauth.v2.access",
    "zoom": "https://zoom.us/oauth/token",
    "jira": "https://auth.atlassian.com/oauth/token",
}

TEST_ENDPOINTS: Dict[str, str] = {
    "salesforce": "https://mycompany.salesforce.com/services/data/v60.0/sobjects/",
    "microsoft365": "https://graph.microsoft.com/v1.0/me",
    "google": "https://www.googleapis.com/oauth2/v2/userinfo",
    "slack": "https://slack.com/api/auth.test",
    "zoom": "https://api.zoom.us/v2/users/me",
    "jira": "https://api.atlassian.com/oauth/token/accessible-resources",
}


async def exchange_code_for_token(platform: str, code: str) -> Optional[Dict[str, Any]]:
    """
    Exchange an authorization code for tokens

    Args:
        platform: Callback platform slug
        code: Authorization code from the provider redirect

    Returns:
        Token response dict, or None when the provider rejects the exchange

    Raises:
        ValueError: If the platform is not supported
    """
    token_url = TOKEN_URLS.get(platform)
    if token_url is None:
        raise ValueError(f"Unsupported platform: {platform}")

    client_id, client_secret = settings.oauth_credentials(platform)
    data = {
        "grant_type": "authorization_code",
        "client_id": client_id,
        "client_secret": client_secret,
        "code": code,
        "redirect_uri": callback_uri(platform),
    }

    try:
        response = await asyncio.to_thread(
            requests.post,
            token_url,
            data=data,
            headers={"Accept": "application/json"},
            timeout=settings.OAUTH_HTTP_TIMEOUT,
        )
        if not response.ok:
            logger.error(f"Token exchange failed for {platform}: {response.text[:500]}")
            return None
        return response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Error exchanging token for {platform}: {e}")
        return None


async def check_integration_connection(platform: str, access_token: str) -> Dict[str, Any]:
    """Call the provider's identity endpoint once with the new token"""
    endpoint = TEST_ENDPOINTS.get(platform)
    if endpoint is None:
        return {"success": False, "error": "No test endpoint configured"}

    try:
        response = await asyncio.to_thread(
            requests.get,
            endpoint,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
            timeout=settings.OAUTH_HTTP_TIMEOUT,
        )
        if response.ok:
            payload = response.json()
            if platform == "slack":
                data = payload
            else:
                data = {"user_id": payload.get("id") or payload.get("sub")} if isinstance(payload, dict) else {}
            return {"success": True, "data": data, "tested_at": utc_now_iso()}
        return {"success": False, "error": f"HTTP {response.status_code}", "tested_at": utc_now_iso()}
    except (requests.RequestException, ValueError) as e:
        return {"success": False, "error": str(e), "tested_at": utc_now_iso()}
