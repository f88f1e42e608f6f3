from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Event Access API"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", description="Level for the event_access logger")

    # -------------------------------------------------
    # Frontend Domains (CORS)
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = []
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Permission Engine
    # -------------------------------------------------
    # Platform roles that override entity topology on every event
    PLATFORM_ADMIN_ROLES: List[str] = Field(
        default_factory=lambda: ["superadmin", "admin"],
        description="user_roles.role values treated as platform admins",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    model_config = SettingsConfigDict(case_sensitive=True)


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

for domain in settings.FRONTEND_DOMAINS:
    if not domain.startswith("http"):
        domain = f"https://{domain}"
    cors_origins.append(domain.rstrip("/"))

# remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
