"""
Crisis Search - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal, List


class BackendSettings(BaseSettings):
    """Resource-search backend configuration."""
    base_url: str = Field("http://localhost:8000", alias="BACKEND_URL")
    api_key: Optional[str] = Field(None, alias="BACKEND_API_KEY")
    timeout_ms: int = Field(15000, alias="BACKEND_TIMEOUT_MS")
    max_retries: int = Field(3, alias="BACKEND_MAX_RETRIES")
    backoff_ms: int = Field(1000, alias="BACKEND_BACKOFF_MS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class OpenAISettings(BaseSettings):
    """OpenAI extraction provider configuration."""
    api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    base_url: str = Field("https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    model: str = Field("gpt-4-turbo-preview", alias="OPENAI_MODEL")
    timeout_ms: int = Field(15000, alias="OPENAI_TIMEOUT_MS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class AnthropicSettings(BaseSettings):
    """Anthropic extraction provider configuration."""
    api_key: Optional[str] = Field(None, alias="ANTHROPIC_API_KEY")
    base_url: str = Field("https://api.anthropic.com/v1", alias="ANTHROPIC_BASE_URL")
    model: str = Field("claude-3-5-sonnet-20241022", alias="ANTHROPIC_MODEL")
    api_version: str = Field("2023-06-01", alias="ANTHROPIC_VERSION")
    max_tokens: int = Field(2048, alias="ANTHROPIC_MAX_TOKENS")
    timeout_ms: int = Field(15000, alias="ANTHROPIC_TIMEOUT_MS")

    model_config = {"env_prefix": "", "extra": "ignore"}


class ExtractionSettings(BaseSettings):
    """Filter extraction configuration."""
    providers: str = Field("openai,anthropic", alias="EXTRACTION_PROVIDERS")
    temperature: float = Field(0.3, alias="EXTRACTION_TEMPERATURE")
    fallback_radius_km: float = Field(25.0, alias="FALLBACK_RADIUS_KM")

    model_config = {"env_prefix": "", "extra": "ignore"}

    @property
    def provider_order(self) -> List[str]:
        """Provider names in priority order."""
        return [
            name.strip().lower()
            for name in self.providers.split(",")
            if name.strip()
        ]


class SearchSettings(BaseSettings):
    """Search request policy configuration."""
    fallback_query: str = Field(
        "mental health services", alias="SEARCH_FALLBACK_QUERY"
    )

    model_config = {"env_prefix": "", "extra": "ignore"}


class HTTPSettings(BaseSettings):
    """HTTP API configuration."""
    host: str = Field("0.0.0.0", alias="HTTP_HOST")
    port: int = Field(8000, alias="HTTP_PORT")
    debug: bool = Field(False, alias="DEBUG")

    model_config = {"env_prefix": "", "extra": "ignore"}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["http", "sse", "stdio"] = Field("http", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore"}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )
    format: Literal["json", "text"] = Field("json", alias="LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore"}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    backend: BackendSettings = Field(default_factory=BackendSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    anthropic: AnthropicSettings = Field(default_factory=AnthropicSettings)
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    http: HTTPSettings = Field(default_factory=HTTPSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()
