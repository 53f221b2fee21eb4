from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    PROJECT_NAME: str = "Portal Público API"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    SITE_URL: str = "https://www.sanremo.com.br"
    CORS_ORIGINS: str = "*"

    # Content Store: "supabase" (API de dados hospedada) ou "sql" (SQLAlchemy)
    CONTENT_STORE_BACKEND: str = "supabase"
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None
    SUPABASE_SCHEMA: str = "public"
    LISTINGS_VIEW: str = "public_empreendimentos"
    DATABASE_URL: Optional[str] = None

    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 60

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 120

    SEARCH_RESULT_LIMIT: int = 5
    SEARCH_CANDIDATE_LIMIT: int = 200
    SEARCH_FUZZY_THRESHOLD: float = 80
    SEARCH_FUZZY_MIN_TOKEN_LENGTH: int = 5

    REGION_SUGGESTION_LIMIT: int = 4
    SITEMAP_LISTING_LIMIT: int = 1000
    SITEMAP_CITY_LIMIT: int = 50

    @property
    def cors_origins_list(self):
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
