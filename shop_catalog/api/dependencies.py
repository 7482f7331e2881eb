from typing import Generator, Optional

from fastapi import Header

from shop_catalog.common.tools.shopify_client import ShopifyAdminClient


def get_admin_client(
    x_shopify_access_token: Optional[str] = Header(default=None),
) -> Generator[ShopifyAdminClient, None, None]:
    """
    Аутентифицированный клиент Admin API на время запроса.
    Токен из заголовка X-Shopify-Access-Token, иначе из настроек.
    AuthenticationError ловит обработчик в main.
    """
    client = ShopifyAdminClient.from_settings(access_token=x_shopify_access_token)
    try:
        yield client.authenticate()
    finally:
        client.close()
