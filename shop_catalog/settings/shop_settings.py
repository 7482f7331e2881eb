from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ShopSettings(BaseSettings):
    """Доступ к Admin GraphQL API магазина."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SHOPIFY_SHOP_DOMAIN: str = ""
    SHOPIFY_ACCESS_TOKEN: Optional[str] = None
    SHOPIFY_API_VERSION: str = "2024-10"
    SHOPIFY_TIMEOUT: float = 30.0


shop_settings = ShopSettings()
