from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    avatar_bucket: str = "avatar-images"

    # Navigation
    sign_in_path: str = "/auth"
    home_path: str = "/"
    guard_excluded_prefixes: str = "/api,/static,/favicon.ico,/health,/ready,/docs,/redoc,/openapi.json"

    # Session cookies
    access_token_cookie: str = "sb-access-token"
    refresh_token_cookie: str = "sb-refresh-token"
    cookie_secure: bool = False

    # Search
    search_debounce_seconds: float = 0.3

    # App
    app_name: str = "metaverse-sns"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_guard_excluded_prefixes(self) -> List[str]:
        return [p.strip() for p in self.guard_excluded_prefixes.split(",") if p.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
