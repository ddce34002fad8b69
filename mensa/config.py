# =============================================================================
# mensa/config.py  —  Settings loaded from environment variables
# =============================================================================
#
# All knobs live here so the rest of the code never reads os.environ directly.
# Every variable carries the MENSA_ prefix and may also come from a local
# .env file:
#
#   MENSA_API_BASE_URL   → eat-api root (default: the public GitHub Pages site)
#   MENSA_HTTP_TIMEOUT   → seconds per HTTP request (default: 10)
#   MENSA_TIMEZONE       → IANA zone for "today" (default: process-local clock)
#   MENSA_LOG_LEVEL      → DEBUG | INFO | WARNING | ERROR | CRITICAL
#   MENSA_MCP_TRANSPORT  → stdio | sse | http
#   MENSA_MCP_HOST / MENSA_MCP_PORT → bind address for sse/http
#   MENSA_AGENT_MODEL    → LiteLlm model string for the chat agent
#   MENSA_AGENT_APP_NAME / MENSA_AGENT_USER_ID → ADK session identity
#
# Invalid values fail when Settings is built (pydantic ValidationError, a
# ValueError subclass), never later inside the server.
# =============================================================================

from datetime import tzinfo
from functools import lru_cache
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://tum-dev.github.io/eat-api"

Transport = Literal["stdio", "sse", "http"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Runtime configuration for the mensa tools and the chat agent."""

    model_config = SettingsConfigDict(
        env_prefix="MENSA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # eat-api
    api_base_url: str = DEFAULT_API_BASE_URL
    http_timeout: float = 10.0

    # Calendar
    timezone: Optional[str] = None

    # MCP server
    log_level: LogLevel = "INFO"
    mcp_transport: Transport = "stdio"
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8000

    # Chat agent
    agent_model: str = "openrouter/openai/gpt-4o"
    agent_app_name: str = "munich_mensa"
    agent_user_id: str = "demo_user"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("mcp_transport", mode="before")
    @classmethod
    def _lower_transport(cls, value):
        return value.lower() if isinstance(value, str) else value

    @field_validator("timezone", mode="before")
    @classmethod
    def _known_timezone(cls, value):
        if not value:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone {value!r}") from e
        return value

    @property
    def tz(self) -> Optional[tzinfo]:
        """The configured time zone, or None for the process-local clock."""
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
