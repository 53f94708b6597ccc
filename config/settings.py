from pydantic import Field
from pydantic_settings import BaseSettings


class BotSettings(BaseSettings):
    discord_token: str = Field(..., description="Discord bot token")
    database_url: str = Field(default="sqlite:///data/bot.db", description="Database connection URL")

    bot_prefix: str = Field(default="!", description="Default command prefix for new guilds")
    default_locale: str = Field(default="en-GB", description="Default locale for new guilds")
    error_colour: str = Field(default="#E74C3C", description="Default error embed colour")
    success_colour: str = Field(default="#2ECC71", description="Default success embed colour")

    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Dispatch
    command_timeout: float = Field(default=60.0, description="Seconds a command handler may run before it is cancelled")

    # Plugin configuration
    enabled_plugins: list[str] = Field(default=[], description="List of enabled plugins")
    plugin_directories: list[str] = Field(
        default=["plugins"],
        description="Directories to scan for plugins",
    )

    # Development settings
    debug: bool = Field(default=False, description="Enable debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = BotSettings()
