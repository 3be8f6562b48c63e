"""
Static registry of supported third-party integrations and OAuth URL helpers
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from app.config import settings
from app.schemas.integrations import IntegrationDescriptor, IntegrationView, OAuthConfig


# Callback path segment per integration; the provider redirects to
# /api/integrations/callback/<slug>
CALLBACK_SLUGS: Dict[str, str] = {
    "salesforce": "salesforce",
    "microsoft365": "microsoft365",
    "google_workspace": "google",
    "slack": "slack",
    "zoom": "zoom",
    "jira": "jira",
}


def callback_uri(slug: str) -> str:
    return f"{settings.APP_BASE_URL}/api/integrations/callback/{slug}"


def _oauth(auth_url: str, token_url: str, integration_id: str, scopes: List[str]) -> OAuthConfig:
    slug = CALLBACK_SLUGS[integration_id]
    client_id, _ = settings.oauth_credentials(slug)
    return OAuthConfig(
        auth_url=auth_url,
        token_url=token_url,
        client_id=client_id,
        scopes=scopes,
        redirect_uri=callback_uri(slug),
    )


def supported_integrations() -> List[IntegrationDescriptor]:
    """Build the descriptor list; redirect URIs follow the configured base URL"""
    return [
        IntegrationDescriptor(
            id="salesforce",
            name="Salesforce CRM",
            type="oauth2",
            oauth_config=_oauth(
                "https://login.salesforce.com/services/oauth2/authorize",
                "https://login.salesforce.com/services/oauth2/token",
                "salesforce",
                ["api", "refresh_token", "offline_access", "full"],
            ),
            capabilities=[
                "Lead Management",
                "Opportunity Tracking",
                "Account Synchronization",
                "Task Automation",
                "Report Generation",
                "Data Analytics",
                "Workflow Automation",
            ],
        ),
        IntegrationDescriptor(
            id="microsoft365",
            name="Microsoft Office 365",
            type="oauth2",
            oauth_config=_oauth(
                "https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
                "https://login.microsoftonline.com/common/oauth2/v2.0/token",
                "microsoft365",
                [
                    "https://graph.microsoft.com/Mail.ReadWrite",
                    "https://graph.microsoft.com/Calendars.ReadWrite",
                    "https://graph.microsoft.com/Files.ReadWrite.All",
                    "https://graph.microsoft.com/User.Read",
                    "offline_access",
                ],
            ),
            capabilities=[
                "Email Automation",
                "Calendar Management",
                "Document Processing",
                "Meeting Scheduling",
                "Contact Synchronization",
                "OneDrive Integration",
                "Teams Integration",
            ],
        ),
        IntegrationDescriptor(
            id="google_workspace",
            name="Google Workspace",
            type="oauth2",
            oauth_config=_oauth(
                "https://accounts.google.com/o/oauth2/v2/auth",
                "https://oauth2.googleapis.com/token",
                "google_workspace",
                [
                    "https://www.googleapis.com/auth/gmail.modify",
                    "https://www.googleapis.com/auth/calendar",
                    "https://www.googleapis.com/auth/drive.file",
                    "https://www.googleapis.com/auth/userinfo.email",
                ],
            ),
            capabilities=[
                "Gmail Intelligence",
                "Calendar AI",
                "Drive Document Analysis",
                "Contact Management",
                "Meeting Automation",
                "Workspace Analytics",
            ],
        ),
        IntegrationDescriptor(
            id="slack",
            name="Slack Communications",
            type="oauth2",
            oauth_config=_oauth(
                "https://slack.com/oauth/v2/authorize",
                "https://slack.com/api/oauth.v2.access",
                "slack",
                ["channels:read", "chat:write", "users:read", "reactions:write", "files:read"],
            ),
            capabilities=[
                "Automated Responses",
                "Channel Monitoring",
                "Meeting Summaries",
                "Team Analytics",
                "File Intelligence",
                "Workflow Triggers",
            ],
        ),
        IntegrationDescriptor(
            id="zoom",
            name="Zoom Video Conferencing",
            type="oauth2",
            oauth_config=_oauth(
                "https://zoom.us/oauth/authorize",
                "https://zoom.us/oauth/token",
                "zoom",
                ["meeting:write", "meeting:read", "recording:read", "user:read"],
            ),
            capabilities=[
                "Meeting Transcription",
                "Automated Scheduling",
                "Recording Analysis",
                "Attendance Tracking",
                "Follow-up Generation",
                "Meeting Intelligence",
            ],
        ),
        IntegrationDescriptor(
            id="jira",
            name="Jira Project Management",
            type="oauth2",
            oauth_config=_oauth(
                "https://auth.atlassian.com/authorize",
                "https://auth.atlassian.com/oauth/token",
                "jira",
                ["read:jira-work", "write:jira-work", "read:jira-user"],
            ),
            capabilities=[
                "Automated Ticket Creation",
                "Sprint Planning Assistance",
                "Progress Tracking",
                "Workflow Optimization",
                "Team Performance Analytics",
                "Epic Management",
            ],
        ),
    ]


def find_integration(integration_id: str) -> Optional[IntegrationDescriptor]:
    return next((i for i in supported_integrations() if i.id == integration_id), None)


def integration_id_for_slug(slug: str) -> str:
    """Map a callback slug back to its integration ID (google -> google_workspace)"""
    for integration_id, candidate in CALLBACK_SLUGS.items():
        if candidate == slug:
            return integration_id
    return slug


def merge_status(
    integrations: List[IntegrationDescriptor],
    status_map: Dict[str, Any],
) -> List[IntegrationView]:
    return [
        IntegrationView(
            **integration.model_dump(exclude={"status"}),
            status=status_map.get(integration.id) or integration.status,
            connected_at=status_map.get(f"{integration.id}_connected_at"),
            last_sync=status_map.get(f"{integration.id}_last_sync"),
            sync_status=status_map.get(f"{integration.id}_sync_status") or "idle",
        )
        for integration in integrations
    ]


def generate_state_token(integration_id: str) -> str:
    """`<integration_id>_<epoch millis>_<random>`; an anti-CSRF placeholder only"""
    timestamp = int(time.time() * 1000)
    return f"{integration_id}_{timestamp}_{uuid.uuid4().hex[:11]}"


def validate_state_token(state: str, platform: str) -> bool:
    return platform in state and len(state.split("_")) >= 3


def build_oauth_url(config: OAuthConfig, state: str) -> str:
    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "scope": " ".join(config.scopes),
        "state": state,
        "response_type": "code",
        "access_type": "offline",
    }
    return f"{config.auth_url}?{urlencode(params)}"
