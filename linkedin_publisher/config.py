from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings
from typing import List, Optional
from dotenv import load_dotenv
from functools import lru_cache

# Load environment variables
load_dotenv()

DEFAULT_SCOPES = (
    "openid profile email rw_organization_admin r_basicprofile "
    "w_organization_social r_organization_social"
)


class LinkedInCredentials(BaseModel):
    """LinkedIn app credentials, loaded once at startup."""
    client_id: str
    client_secret: str
    redirect_uri: str

    model_config = ConfigDict(frozen=True)


class Settings(BaseSettings):
    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    ALLOWED_ORIGINS: str = "*"

    # LinkedIn
    LINKEDIN_CLIENT_ID: str
    LINKEDIN_CLIENT_SECRET: str
    LINKEDIN_REDIRECT_URI: str = "http://localhost:3000/linkedin/callback"
    LINKEDIN_SCOPES: str = DEFAULT_SCOPES
    LINKEDIN_VERIFY_STATE: bool = True
    LINKEDIN_AUTO_POST_TEXT: Optional[str] = None

    # Security
    ENCRYPTION_KEY: Optional[str] = None
    STATE_TTL_SECONDS: int = 600

    # Upstream HTTP
    HTTP_TIMEOUT: float = 5.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE: str = "linkedin_publisher.log"

    @property
    def linkedin_credentials(self) -> LinkedInCredentials:
        """Get LinkedIn credentials as an immutable object."""
        return LinkedInCredentials(
            client_id=self.LINKEDIN_CLIENT_ID,
            client_secret=self.LINKEDIN_CLIENT_SECRET,
            redirect_uri=self.LINKEDIN_REDIRECT_URI
        )

    @property
    def scopes(self) -> List[str]:
        """Get requested scopes as list."""
        return [s for s in self.LINKEDIN_SCOPES.replace(",", " ").split() if s]

    @property
    def cors_origins(self) -> List[str]:
        """Get CORS origins as list."""
        if self.ENVIRONMENT == "development":
            return ["*"]
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True


def validate_settings(settings: Settings) -> None:
    """Validate settings that pydantic cannot check on its own."""
    if settings.ENVIRONMENT not in ["development", "production", "testing"]:
        raise ValueError("Invalid environment")

    if settings.ENVIRONMENT == "production" and not settings.ENCRYPTION_KEY:
        raise ValueError("ENCRYPTION_KEY must be set in production")


# Create cached settings instance
@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    validate_settings(settings)
    return settings
