from urllib.parse import parse_qs, urlparse

import pytest

from app.config import settings
from app.services.integration_registry import (
    build_oauth_url,
    find_integration,
    generate_state_token,
    integration_id_for_slug,
    merge_status,
    supported_integrations,
    validate_state_token,
)
from app.services.stores import SEED_CONNECTIONS


@pytest.mark.unit
class TestRegistry:
    """Static integration descriptors"""

    def test_six_oauth_integrations(self):
        integrations = supported_integrations()
        assert [i.id for i in integrations] == [
            "salesforce", "microsoft365", "google_workspace", "slack", "zoom", "jira",
        ]
        assert all(i.type == "oauth2" and i.oauth_config for i in integrations)

    def test_google_workspace_uses_google_callback(self):
        google = find_integration("google_workspace")
        assert google.oauth_config.redirect_uri == (
            f"{settings.APP_BASE_URL}/api/integrations/callback/google"
        )

    def test_unknown_integration(self):
        assert find_integration("dropbox") is None

    def test_slug_mapping(self):
        assert integration_id_for_slug("google") == "google_workspace"
        assert integration_id_for_slug("slack") == "slack"

    def test_merge_status_with_seed(self):
        merged = {i.id: i for i in merge_status(supported_integrations(), SEED_CONNECTIONS)}
        assert merged["salesforce"].status == "connected"
        assert merged["salesforce"].connected_at == "2024-01-15T10:30:00Z"
        assert merged["salesforce"].sync_status == "syncing"
        assert merged["zoom"].status == "available"
        assert merged["zoom"].sync_status == "idle"


@pytest.mark.unit
class TestOAuthHelpers:
    """State tokens and authorization URLs"""

    def test_state_token_format(self):
        state = generate_state_token("slack")
        parts = state.split("_")
        assert parts[0] == "slack"
        assert parts[1].isdigit()
        assert validate_state_token(state, "slack")

    def test_google_state_validates_for_google_slug(self):
        assert validate_state_token(generate_state_token("google_workspace"), "google")

    @pytest.mark.parametrize("state,platform", [
        ("zoom_123_abc", "slack"),
        ("slack123", "slack"),
        ("slack_only", "slack"),
    ])
    def test_invalid_states(self, state, platform):
        assert not validate_state_token(state, platform)

    def test_build_oauth_url(self):
        config = find_integration("slack").oauth_config
        url = build_oauth_url(config, "slack_1_x")
        parsed = urlparse(url)
        query = parse_qs(parsed.query)

        assert url.startswith("https://slack.com/oauth/v2/authorize?")
        assert query["client_id"] == [config.client_id]
        assert query["redirect_uri"] == [config.redirect_uri]
        assert query["scope"] == [" ".join(config.scopes)]
        assert query["state"] == ["slack_1_x"]
        assert query["response_type"] == ["code"]
        assert query["access_type"] == ["offline"]
