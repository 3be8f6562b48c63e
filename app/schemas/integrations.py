"""
Integration registry and OAuth related schemas
"""
from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field


IntegrationType = Literal["oauth2", "api_key", "webhook"]
IntegrationStatus = Literal["available", "connected", "error", "pending"]


class OAuthConfig(BaseModel):
    """OAuth2 endpoints and client registration for a platform"""
    auth_url: str = Field(..., description="Provider authorize endpoint")
    token_url: str = Field(..., description="Provider token endpoint")
    client_id: str = Field(..., description="OAuth client ID")
    scopes: List[str] = Field(default_factory=list, description="Requested scopes")
    redirect_uri: str = Field(..., description="Callback URI registered with the provider")


class IntegrationDescriptor(BaseModel):
    """Static description of a third-party platform"""
    id: str
    name: str
    type: IntegrationType
    status: IntegrationStatus = "available"
    oauth_config: Optional[OAuthConfig] = None
    capabilities: List[str] = Field(default_factory=list)


class IntegrationView(IntegrationDescriptor):
    """Descriptor merged with its connection status"""
    connected_at: Optional[str] = None
    last_sync: Optional[str] = None
    sync_status: str = "idle"


class IntegrationListResponse(BaseModel):
    success: bool = True
    integrations: List[IntegrationView]
    total: int
    connected: int
    available: int


class IntegrationActionRequest(BaseModel):
    """Body for connect/disconnect requests"""
    integration_id: Optional[str] = Field(None, description="Integration ID")
    action: Literal["connect", "disconnect"] = Field("connect", description="Requested action")

    class Config:
        json_schema_extra = {
            "example": {
                "integration_id": "salesforce",
                "action": "connect"
            }
        }


class IntegrationConnectResponse(BaseModel):
    success: bool = True
    auth_url: str
    integration_id: str
    state: str
    message: str


class IntegrationUpdateRequest(BaseModel):
    """Body for integration configuration updates"""
    integration_id: Optional[str] = Field(None, description="Integration ID")
    config: Optional[Dict[str, Any]] = Field(None, description="Integration configuration")
    settings: Optional[Dict[str, Any]] = Field(None, description="User settings for the integration")


class IntegrationMessageResponse(BaseModel):
    success: bool = True
    message: str
    integration_id: str
