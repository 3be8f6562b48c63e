"""
Application configuration
"""
import os
from pydantic_settings import BaseSettings
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "RockstarAI Assistant"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENV: str = ""  # Environment variable for logger configuration

    # Public URL of the web UI (OAuth redirects and callback URIs are built from it)
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:3000")

    # OpenAI-compatible chat completion endpoint
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    LLM_BASE_URL: Optional[str] = os.getenv("LLM_BASE_URL")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    LLM_TIMEOUT: int = int(os.getenv("LLM_TIMEOUT", "30"))
    LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "0"))

    # OAuth client credentials (demo values are used when unset)
    SALESFORCE_CLIENT_ID: str = os.getenv("SALESFORCE_CLIENT_ID", "apex_ai_salesforce_client")
    SALESFORCE_CLIENT_SECRET: str = os.getenv("SALESFORCE_CLIENT_SECRET", "demo_secret")
    MICROSOFT365_CLIENT_ID: str = os.getenv("MICROSOFT365_CLIENT_ID", "apex_ai_ms365_client")
    MICROSOFT365_CLIENT_SECRET: str = os.getenv("MICROSOFT365_CLIENT_SECRET", "demo_secret")
    GOOGLE_CLIENT_ID: str = os.getenv("GOOGLE_CLIENT_ID", "apex_ai_google_client")
    GOOGLE_CLIENT_SECRET: str = os.getenv("GOOGLE_CLIENT_SECRET", "demo_secret")
    SLACK_CLIENT_ID: str = os.getenv("SLACK_CLIENT_ID", "apex_ai_slack_client")
    SLACK_CLIENT_SECRET: str = os.getenv("SLACK_CLIENT_SECRET", "demo_secret")
    ZOOM_CLIENT_ID: str = os.getenv("ZOOM_CLIENT_ID", "apex_ai_zoom_client")
    ZOOM_CLIENT_SECRET: str = os.getenv("ZOOM_CLIENT_SECRET", "demo_secret")
    JIRA_CLIENT_ID: str = os.getenv("JIRA_CLIENT_ID", "apex_ai_jira_client")
    JIRA_CLIENT_SECRET: str = os.getenv("JIRA_CLIENT_SECRET", "demo_secret")
    OAUTH_HTTP_TIMEOUT: int = int(os.getenv("OAUTH_HTTP_TIMEOUT", "30"))

    # Uploads and knowledge base
    UPLOAD_MAX_FILE_SIZE: int = 10 * 1024 * 1024
    KB_CONTENT_PREVIEW_CHARS: int = 500
    KB_DEFAULT_LIMIT: int = 50

    # Embeddable widget
    WIDGET_REPLY_DELAY_MS: int = 1500

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def oauth_credentials(self, platform: str) -> tuple[str, str]:
        """Return (client_id, client_secret) for an OAuth callback platform slug"""
        prefix = {
            "salesforce": "SALESFORCE",
            "microsoft365": "MICROSOFT365",
            "google": "GOOGLE",
            "slack": "SLACK",
            "zoom": "ZOOM",
            "jira": "JIRA",
        }.get(platform)
        if prefix is None:
            raise ValueError(f"Unsupported platform: {platform}")
        return getattr(self, f"{prefix}_CLIENT_ID"), getattr(self, f"{prefix}_CLIENT_SECRET")


settings = Settings()
