from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from files
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.docker"),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="salesdesk", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # Infrastructure
    DATABASE_URL: str = Field(
        default="postgresql+asyncpg://postgres:postgres@db:5432/salesdesk",
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )
    DB_SSL: bool = Field(default=False, validation_alias=AliasChoices("DB_SSL", "db_ssl"))

    # Auth collaborator (tokens are issued elsewhere, we only verify them)
    JWT_SECRET: str = Field(default="change-me", validation_alias=AliasChoices("JWT_SECRET", "jwt_secret"))
    JWT_ALGORITHM: str = Field(default="HS256", validation_alias=AliasChoices("JWT_ALGORITHM", "jwt_algorithm"))

    # Documents
    NUMBER_PREFIX: str = Field(default="RX", validation_alias=AliasChoices("NUMBER_PREFIX", "number_prefix"))
    COMPANY_STATE: str = Field(default="Maharashtra", validation_alias=AliasChoices("COMPANY_STATE", "company_state"))
    DEFAULT_GST_RATE: float = Field(default=18.0, ge=0, le=100, validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"))
    REQUIRE_ACCEPTED_QUOTATION: bool = Field(
        default=False,
        validation_alias=AliasChoices("REQUIRE_ACCEPTED_QUOTATION", "require_accepted_quotation"),
    )
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1, le=100, validation_alias=AliasChoices("DEFAULT_PAGE_SIZE", "default_page_size"))


settings = Settings()
