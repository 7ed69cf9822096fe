"""Environment-driven settings for the cart manager."""
import os
from dataclasses import dataclass
from functools import cache

DEFAULT_API_URL = "http://localhost:3333"
DEFAULT_API_TIMEOUT = 5.0
DEFAULT_CART_KEY = "@RocketShoes:cart"

STORAGE_BACKENDS = ("memory", "redis")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read once from the environment."""
    api_url: str = DEFAULT_API_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    cart_storage_key: str = DEFAULT_CART_KEY
    storage_backend: str = "memory"
    redis_url: str = ""
    redis_token: str = ""

    @classmethod
    def from_env(cls) -> "Settings":
        backend = os.environ.get("CART_STORAGE_BACKEND", "memory").lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"CART_STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
            )

        timeout_raw = os.environ.get("STOREFRONT_API_TIMEOUT", str(DEFAULT_API_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"STOREFRONT_API_TIMEOUT must be a number, got {timeout_raw!r}")

        return cls(
            api_url=os.environ.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/"),
            api_timeout=timeout,
            cart_storage_key=os.environ.get("CART_STORAGE_KEY", DEFAULT_CART_KEY),
            storage_backend=backend,
            # Upstash uses REST_URL and REST_TOKEN
            redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
            redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
        )


@cache
def get_settings() -> Settings:
    """Get settings built from the current environment (cached)."""
    return Settings.from_env()
