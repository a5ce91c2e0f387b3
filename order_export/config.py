"""
Runtime settings for the weekly order export.

Values come from the environment (or a local .env file) using the variable
names listed on each field.
"""
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExportSettings(BaseSettings):
    """Configuration settings for one export process."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True)

    # Order source
    shopify_store: str = Field(validation_alias="SHOPIFY_STORE")
    shopify_access_token: str = Field(validation_alias="SHOPIFY_ACCESS_TOKEN")
    shopify_api_version: str = Field("2024-01", validation_alias="SHOPIFY_API_VERSION")
    shopify_page_limit: int = Field(250, ge=1, le=250, validation_alias="SHOPIFY_PAGE_LIMIT")
    shopify_timeout: float = Field(30.0, gt=0, validation_alias="SHOPIFY_TIMEOUT")

    # Delivery
    sftp_host: str = Field(validation_alias="SFTP_HOST")
    sftp_port: int = Field(22, validation_alias="SFTP_PORT")
    sftp_user: str = Field(validation_alias="SFTP_USER")
    sftp_password: str = Field(validation_alias="SFTP_PASSWORD")
    sftp_remote_path: str = Field(validation_alias="SFTP_REMOTE_PATH")
    sftp_timeout: float = Field(30.0, gt=0, validation_alias="SFTP_TIMEOUT")
    sftp_strict_host_key: bool = Field(False, validation_alias="SFTP_STRICT_HOST_KEY")

    # Logging
    log_file: Optional[str] = Field("shopify_export.log", validation_alias="EXPORT_LOG_FILE")
    log_level: str = Field("INFO", validation_alias="EXPORT_LOG_LEVEL")

    # Schedule: Mondays at 01:00
    schedule: str = Field("0 1 * * 1", validation_alias="EXPORT_SCHEDULE")
    timezone: str = Field("UTC", validation_alias="EXPORT_TIMEZONE")

    # Output
    on_error: Literal["raise", "warn", "blank"] = Field("raise", validation_alias="EXPORT_ON_ERROR")
    quote_all: bool = Field(False, validation_alias="EXPORT_QUOTE_ALL")
