from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import SettingsConfigDict, BaseSettings
from typing import Optional


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/75.0.3770.142 Safari/537.36"
)
DEFAULT_REFERRER = "http://www.google.com"
DEFAULT_TIMEOUT_MILLIS = 30 * 1000


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # Fetching defaults
    fetch_user_agent: str = DEFAULT_USER_AGENT
    fetch_referrer: str = DEFAULT_REFERRER
    fetch_timeout_millis: int = DEFAULT_TIMEOUT_MILLIS  # 0 disables the timeout
    fetch_ignore_content_type: bool = True
    fetch_ignore_http_errors: bool = False
    fetch_follow_redirects: bool = True
    fetch_validate_tls_certificates: bool = True

    # URL validation
    block_private_hosts: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="PAGEMETA_",
        env_file=".env",  # Load from .env file if it exists
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields in env file
    )


# Create a single instance of settings
settings = Settings()


class FetchConfig(BaseModel):
    """
    Transport options for a single extraction call.

    Instances are frozen; derive a variant with ``model_copy(update={...})``.
    """

    model_config = ConfigDict(frozen=True)

    user_agent: str = DEFAULT_USER_AGENT
    referrer: str = DEFAULT_REFERRER
    timeout_millis: int = Field(default=DEFAULT_TIMEOUT_MILLIS, ge=0)
    ignore_content_type: bool = True
    ignore_http_errors: bool = False
    follow_redirects: bool = True
    validate_tls_certificates: bool = True

    @classmethod
    def from_settings(cls, source: Optional[Settings] = None) -> "FetchConfig":
        """Build a config from the environment-driven settings."""
        source = source or settings
        return cls(
            user_agent=source.fetch_user_agent,
            referrer=source.fetch_referrer,
            timeout_millis=source.fetch_timeout_millis,
            ignore_content_type=source.fetch_ignore_content_type,
            ignore_http_errors=source.fetch_ignore_http_errors,
            follow_redirects=source.fetch_follow_redirects,
            validate_tls_certificates=source.fetch_validate_tls_certificates,
        )

    @property
    def timeout_seconds(self) -> Optional[float]:
        """Timeout in seconds as httpx expects it, None meaning no timeout."""
        if self.timeout_millis == 0:
            return None
        return self.timeout_millis / 1000
