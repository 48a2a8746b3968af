from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB URI - must be provided via environment variables
    mongodb_url: Optional[str] = None
    mongodb_uri: Optional[str] = None  # Alternative environment variable names
    mongo_uri: Optional[str] = None

    # Collections are resolved once at startup
    contacts_collection: str = "contacts"
    education_collection: str = "education"

    # Mail relay used for operator notifications
    mail_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    mail_api_key: Optional[str] = None
    mail_from: Optional[str] = None
    notify_email: Optional[str] = None
    mail_timeout: float = 15.0

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    allowed_origins: List[str] = ["*"]
    trust_proxy_headers: bool = False
    log_level: str = "INFO"

    @property
    def effective_mongo_uri(self) -> str:
        """Get the effective MongoDB URI from available sources"""
        uri = self.mongodb_url or self.mongodb_uri or self.mongo_uri
        if not uri:
            raise ValueError("MongoDB URI not configured! Please set MONGODB_URL in your environment variables.")
        return uri


@lru_cache
def get_settings():
    return Settings()
