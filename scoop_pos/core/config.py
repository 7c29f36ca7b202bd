"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the point-of-sale service."""

    app_name: str = "Scoop POS API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./scoop_pos.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "720"))
    admin_user: str = getenv("ADMIN_USER", "")
    admin_pass: str = getenv("ADMIN_PASS", "")
    local_state_path: str = getenv("LOCAL_STATE_PATH", "./scoop_pos_state.json")
    tax_rate: Decimal = Decimal(getenv("POS_TAX_RATE", "0"))
    currency_symbol: str = getenv("POS_CURRENCY_SYMBOL", "₹")
    seed_menu: bool = getenv("SEED_MENU", "1") == "1"
    dashboard_refresh_seconds: int = int(getenv("DASHBOARD_REFRESH_SECONDS", "30"))


settings: Settings = Settings()
