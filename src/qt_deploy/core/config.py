"""Configuration management for qt-deploy."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Deployment tool settings.

    The four positional CLI arguments are never read from here; these are the
    knobs around them (external tools, filtering, logging).
    """

    model_config = SettingsConfigDict(
        env_prefix="QT_DEPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # External tools
    ldd_command: str = Field("ldd", description="Dynamic dependency lister executable")
    plugins_query_key: str = Field(
        "QT_INSTALL_PLUGINS",
        description="Key passed to `qtpaths -query` to locate the plugin root",
    )
    command_timeout_seconds: float = Field(
        60.0,
        description="Timeout for each external command invocation",
    )

    # Filtering
    exclude_token: str = Field(
        "incos",
        description="Reported libraries whose path contains this substring are never copied",
    )

    # Observability
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("console", description="Log renderer: console or json")

    @field_validator("command_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError(f"command_timeout_seconds must be > 0, got: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Restrict log level to the standard logging levels."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {v}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Restrict log format to the supported renderers."""
        v = v.lower()
        if v not in ("console", "json"):
            raise ValueError(f"log_format must be 'console' or 'json', got: {v}")
        return v
