"""Runtime settings read from the environment.

Provider credentials are not validated here: a missing value surfaces as a
transport or authentication failure on the first call that needs it.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATAFORSEO_BASE_URL = "https://api.dataforseo.com"
AZURE_API_VERSION = "2023-12-01-preview"
DEFAULT_DB_PATH = "searchchat.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    dataforseo_login: str = Field(default="", validation_alias="DATAFORSEO_LOGIN")
    dataforseo_password: str = Field(default="", validation_alias="DATAFORSEO_PASSWORD")
    dataforseo_base_url: str = DATAFORSEO_BASE_URL

    azure_openai_key: str = Field(default="", validation_alias="AZURE_OPENAI_KEY")
    azure_openai_endpoint: str = Field(default="", validation_alias="AZURE_OPENAI_ENDPOINT")
    azure_openai_deployment: str = Field(default="", validation_alias="AZURE_OPENAI_DEPLOYMENT")
    azure_api_version: str = AZURE_API_VERSION

    supabase_url: str | None = Field(default=None, validation_alias="SUPABASE_URL")
    supabase_service_role_key: str | None = Field(
        default=None, validation_alias="SUPABASE_SERVICE_ROLE_KEY"
    )

    db_path: str = Field(default=DEFAULT_DB_PATH, validation_alias="SEARCHCHAT_DB_PATH")

    @field_validator("azure_openai_endpoint", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: str | None) -> str:
        return (value or "").rstrip("/")

    @field_validator("supabase_url", "supabase_service_role_key", mode="before")
    @classmethod
    def _empty_to_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        return cls()

    @property
    def uses_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)
