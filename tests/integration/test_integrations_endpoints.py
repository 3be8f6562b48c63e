from urllib.parse import parse_qs, urlparse

import pytest

from app.config import settings
from app.services import oauth_service
from app.services.service_manager import get_connection_store
from app.services.stores import InMemoryConnectionStore


def redirect_params(response):
    location = response.headers["location"]
    parsed = urlparse(location)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == f"{settings.APP_BASE_URL}/integrations"
    return {key: values[0] for key, values in parse_qs(parsed.query).items()}


@pytest.mark.integration
class TestIntegrationsEndpoints:
    """GET/POST/PUT /api/integrations"""

    def test_list(self, client):
        data = client.get("/api/integrations").json()
        assert data["success"] is True
        assert data["total"] == 6
        assert data["connected"] == 1
        assert data["available"] == 5

    def test_filter_by_merged_status(self, client):
        data = client.get("/api/integrations", params={"status": "connected"}).json()
        assert [i["id"] for i in data["integrations"]] == ["salesforce"]
        assert data["integrations"][0]["last_sync"] == "2024-01-16T14:22:00Z"

    def test_connect_returns_auth_url(self, client):
        response = client.post("/api/integrations", json={"integration_id": "jira", "action": "connect"})

        assert response.status_code == 200
        data = response.json()
        assert data["state"].startswith("jira_")
        assert data["auth_url"].startswith("https://auth.atlassian.com/authorize?")
        assert parse_qs(urlparse(data["auth_url"]).query)["state"] == [data["state"]]

    def test_disconnect(self, client):
        response = client.post("/api/integrations", json={"integration_id": "salesforce", "action": "disconnect"})
        assert response.status_code == 200
        assert response.json()["message"] == "Salesforce CRM has been disconnected"

        data = client.get("/api/integrations").json()
        assert data["connected"] == 0

    def test_missing_id(self, client):
        response = client.post("/api/integrations", json={"action": "connect"})
        assert response.status_code == 400
        assert response.json() == {"error": "integration_id is required"}

    def test_unknown_id(self, client):
        response = client.post("/api/integrations", json={"integration_id": "dropbox"})
        assert response.status_code == 404
        assert response.json() == {"error": "Integration not found"}

    def test_update_config(self, client):
        response = client.put("/api/integrations", json={
            "integration_id": "slack",
            "config": {"channel": "#general"},
        })
        assert response.status_code == 200
        assert response.json()["integration_id"] == "slack"

    def test_update_unknown(self, client):
        assert client.put("/api/integrations", json={"integration_id": "nope"}).status_code == 404


@pytest.mark.integration
class TestOAuthCallback:
    """GET /api/integrations/callback/{platform}"""

    def callback(self, client, platform, **params):
        response = client.get(
            f"/api/integrations/callback/{platform}",
            params=params,
            follow_redirects=False,
        )
        assert response.status_code == 307
        return redirect_params(response)

    def test_provider_error_is_passed_through(self, client):
        params = self.callback(client, "slack", error="access_denied")
        assert params == {"error": "access_denied", "platform": "slack"}

    def test_missing_parameters(self, client):
        assert self.callback(client, "zoom", code="abc")["error"] == "missing_parameters"

    def test_invalid_state(self, client):
        assert self.callback(client, "zoom", code="abc", state="jira_1_x")["error"] == "invalid_state"

    def test_token_exchange_failure(self, client, monkeypatch):
        async def no_tokens(platform, code):
            return None

        monkeypatch.setattr(oauth_service, "exchange_code_for_token", no_tokens)
        params = self.callback(client, "zoom", code="abc", state="zoom_1_x")
        assert params["error"] == "token_exchange_failed"

    @pytest.mark.parametrize("payload", [["tok"], "tok", {"error": "invalid_grant"}])
    def test_token_payload_without_access_token(self, client, monkeypatch, fake_response, payload):
        monkeypatch.setattr(oauth_service.requests, "post", lambda *args, **kwargs: fake_response(200, payload))
        params = self.callback(client, "slack", code="abc", state="slack_1_x")
        assert params == {"error": "token_exchange_failed", "platform": "slack"}

    def test_unsupported_platform(self, client):
        params = self.callback(client, "dropbox", code="abc", state="dropbox_1_x")
        assert params == {"error": "unexpected_error", "platform": "dropbox"}

    def test_success_marks_google_workspace_connected(self, client, monkeypatch, fake_response):
        monkeypatch.setattr(
            oauth_service.requests, "post",
            lambda *args, **kwargs: fake_response(200, {"access_token": "tok", "expires_in": 3600}),
        )
        monkeypatch.setattr(
            oauth_service.requests, "get",
            lambda *args, **kwargs: fake_response(200, {"id": "g-42"}),
        )

        params = self.callback(client, "google", code="abc", state="google_workspace_1700000000000_abc")

        assert params == {"success": "true", "platform": "google", "connected": "true"}
        integrations = {i["id"]: i for i in client.get("/api/integrations").json()["integrations"]}
        assert integrations["google_workspace"]["status"] == "connected"
        assert integrations["google_workspace"]["connected_at"] is not None


class RecordingConnectionStore(InMemoryConnectionStore):
    """Keeps what the demo store only logs"""

    def __init__(self):
        super().__init__()
        self.oauth_states = []
        self.tokens = {}

    def store_oauth_state(self, state, integration_id):
        self.oauth_states.append((state, integration_id))

    def store_tokens(self, integration_id, tokens):
        self.tokens[integration_id] = tokens


@pytest.fixture
def recording_store(client):
    store = RecordingConnectionStore()
    client.app.dependency_overrides[get_connection_store] = lambda: store
    yield store
    client.app.dependency_overrides.clear()


@pytest.mark.integration
class TestStoreInteractions:
    """Handlers write through the injected connection store"""

    def test_connect_records_state(self, client, recording_store):
        data = client.post("/api/integrations", json={"integration_id": "zoom"}).json()
        assert recording_store.oauth_states == [(data["state"], "zoom")]

    def test_callback_stores_tokens_under_integration_id(self, client, recording_store, monkeypatch, fake_response):
        monkeypatch.setattr(
            oauth_service.requests, "post",
            lambda *args, **kwargs: fake_response(200, {"access_token": "tok", "refresh_token": "ref"}),
        )
        monkeypatch.setattr(
            oauth_service.requests, "get",
            lambda *args, **kwargs: fake_response(503),
        )

        response = client.get(
            "/api/integrations/callback/google",
            params={"code": "abc", "state": "google_workspace_1_x"},
            follow_redirects=False,
        )

        assert redirect_params(response)["connected"] == "true"
        assert recording_store.tokens["google_workspace"]["refresh_token"] == "ref"
        assert recording_store.status_map()["google_workspace"] == "connected"
