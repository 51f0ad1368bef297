"""Application configuration read from the environment.

Values come from process environment variables, optionally seeded from a
``.env`` file in the working directory. ``VAIRANYA_ENV`` selects the overlay:

    - "test"        → in-memory SQLite unless DATABASE_URL is set
    - "development" → local SQLite file
    - "production"  → DATABASE_URL and SECRET_KEY are mandatory
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_DATABASE_URLS = {
    "test": "sqlite://",
    "development": "sqlite:///vairanya.db",
}
DEV_SECRET_KEY = "dev-secret-change-me"


def current_env() -> str:
    return (os.getenv("VAIRANYA_ENV") or os.getenv("ENVIRONMENT") or os.getenv("ENV") or "development").lower()


def _int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _list(name: str) -> tuple[str, ...]:
    return tuple(value.strip() for value in os.getenv(name, "").split(",") if value.strip())


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    secret_key: str
    access_token_expire_minutes: int
    bcrypt_rounds: int
    razorpay_key_id: str | None
    razorpay_key_secret: str | None
    payment_gateway: str
    storefront_cache_ttl: int
    reviews_cache_ttl: int
    stats_cache_ttl: int
    order_rate_limit: int
    message_rate_limit: int
    rate_limit_window_seconds: int
    trusted_proxies: tuple[str, ...]

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def payment_gateway_configured(self) -> bool:
        return bool(self.razorpay_key_id and self.razorpay_key_secret)


@lru_cache
def get_settings() -> Settings:
    env = current_env()
    database_url = os.getenv("DATABASE_URL") or _DEFAULT_DATABASE_URLS.get(env)
    if not database_url:
        raise RuntimeError(f"DATABASE_URL must be set when VAIRANYA_ENV={env!r}")
    secret_key = os.getenv("SECRET_KEY")
    if not secret_key:
        if env == "production":
            raise RuntimeError(f"SECRET_KEY must be set when VAIRANYA_ENV={env!r}")
        secret_key = DEV_SECRET_KEY

    return Settings(
        env=env,
        database_url=database_url,
        secret_key=secret_key,
        access_token_expire_minutes=_int("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 12),
        bcrypt_rounds=_int("BCRYPT_ROUNDS", 12),
        razorpay_key_id=os.getenv("RAZORPAY_KEY_ID"),
        razorpay_key_secret=os.getenv("RAZORPAY_KEY_SECRET"),
        payment_gateway=os.getenv("PAYMENT_GATEWAY", "fake" if env == "test" else "razorpay").lower(),
        storefront_cache_ttl=_int("STOREFRONT_CACHE_TTL", 300),
        reviews_cache_ttl=_int("REVIEWS_CACHE_TTL", 60),
        stats_cache_ttl=_int("STATS_CACHE_TTL", 30),
        order_rate_limit=_int("ORDER_RATE_LIMIT", 5),
        message_rate_limit=_int("MESSAGE_RATE_LIMIT", 3),
        rate_limit_window_seconds=_int("RATE_LIMIT_WINDOW_SECONDS", 60),
        trusted_proxies=_list("TRUSTED_PROXIES"),
    )


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
