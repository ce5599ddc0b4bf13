from __future__ import annotations
import os
from pydantic import BaseModel

class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "dev")
    app_name: str = os.getenv("APP_NAME", "foss-leaderboard-api")
    app_display_name: str = os.getenv("APP_DISPLAY_NAME", "FOSS Contest Leaderboard")
    app_version: str = os.getenv("APP_VERSION", "0.1.0")
    git_sha: str = os.getenv("GIT_SHA", "dev")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "4000"))
    api_prefix: str = os.getenv("API_PREFIX", "").rstrip("/")  # "/api" matches the web client
    cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./leaderboard.db")
    auto_create_tables: bool = os.getenv("AUTO_CREATE_TABLES", "1") == "1"

    # Credentials
    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret-change-me-0123456789abcdef")
    access_ttl_min: int = int(os.getenv("ACCESS_TTL_MIN", "720"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Contest
    university_email_domain: str = os.getenv("UNIVERSITY_EMAIL_DOMAIN", "mmmut.ac.in")
    admin_roll_number: str = os.getenv("ADMIN_ROLL_NUMBER", "ADMIN001")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "adminpass")
    admin_name: str = os.getenv("ADMIN_NAME", "Event Admin")
    publish_leaderboard_default: bool = os.getenv("PUBLISH_LEADERBOARD_DEFAULT", "1") == "1"

settings = Settings()
