# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to upstream URLs, cache settings, server and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="CREWBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Video platform
    youtube_api_key: str = Field(default="", description="YouTube Data API v3 key")
    playlist_id: str = Field(
        default="PLhjLcvbbPVrVOY5w5Pl7KuSe5fGroQJJD", description="Playlist whose videos are served"
    )

    # Spreadsheet
    sheet_id: str = Field(
        default="1g3Esmr1-Z5jt5_mqOv9-f9fvyFezgT_2Z-8G7w5ChSU", description="Google Sheets document ID"
    )
    sheet_gids: list[str] = Field(
        default=["0", "783570152", "1053703173", "554027446", "1583768346", "1320392700"],
        description="Tab gids exported by the spreadsheet endpoint, in output order",
    )
    video_sheet_gid: str = Field(
        default="1053703173", description="Tab whose rows annotate videos with players, roles and maps"
    )

    # Role documents
    all_the_roles_wiki_url: str = Field(
        default="https://raw.githubusercontent.com/wiki/Zeo666/AllTheRoles",
        description="Raw base URL of the AllTheRoles wiki",
    )
    all_the_roles_pages: list[str] = Field(
        default=["Roles-Crewmate", "Roles-Impostor", "Roles-Neutral"],
        description="Wiki pages holding one role category each",
    )
    the_other_roles_readme_url: str = Field(
        default="https://raw.githubusercontent.com/TheOtherRolesAU/TheOtherRoles/main/README.md",
        description="Raw URL of TheOtherRoles README",
    )
    town_of_us_r_readme_url: str = Field(
        default="https://raw.githubusercontent.com/eDonnes124/Town-Of-Us-R/master/README.md",
        description="Raw URL of the Town Of Us R README",
    )

    # Cache Configuration
    cache_dir: Path = Field(default=Path("cache"), description="Directory holding one JSON file per source")
    cache_ttl_seconds: float = Field(default=60 * 60, description="Age after which a cached source is re-fetched")
    http_timeout: float = Field(default=30.0, description="Timeout in seconds for upstream HTTP requests")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=3001, description="HTTP port")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
