"""
Клиент Admin GraphQL API магазина (Shopify).
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import requests  # type: ignore

from shop_catalog.common.exceptions import AuthenticationError, RemoteAPIError
from shop_catalog.common.logger import logger
from shop_catalog.settings.config import PRODUCTS_PAGE_SIZE, PRODUCTS_QUERY
from shop_catalog.settings.shop_settings import shop_settings


class ShopifyAdminClient:
    def __init__(
        self,
        shop_domain: str,
        access_token: Optional[str],
        api_version: str = "2024-10",
        timeout: float = 30.0,
    ) -> None:
        self.shop_domain = shop_domain.strip().rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self._token = access_token
        self._authenticated = False
        self._session = requests.Session()

    @classmethod
    def from_settings(cls, access_token: Optional[str] = None) -> "ShopifyAdminClient":
        return cls(
            shop_domain=shop_settings.SHOPIFY_SHOP_DOMAIN,
            access_token=access_token or shop_settings.SHOPIFY_ACCESS_TOKEN,
            api_version=shop_settings.SHOPIFY_API_VERSION,
            timeout=shop_settings.SHOPIFY_TIMEOUT,
        )

    @property
    def endpoint(self) -> str:
        domain = self.shop_domain
        if not domain.startswith(("http://", "https://")):
            domain = f"https://{domain}"
        return f"{domain}/admin/api/{self.api_version}/graphql.json"

    def authenticate(self) -> "ShopifyAdminClient":
        """Проверяет, что есть магазин и токен, и вешает токен на сессию."""
        if not self.shop_domain:
            raise AuthenticationError("Shop domain is not configured")
        if not self._token:
            raise AuthenticationError("Admin API access token is missing")
        self._session.headers.update(
            {
                "X-Shopify-Access-Token": self._token,
                "Content-Type": "application/json",
            }
        )
        self._authenticated = True
        return self

    def execute_graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self._authenticated:
            self.authenticate()

        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            resp = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("GraphQL transport error: %s", e)
            raise RemoteAPIError("Failed to reach the Admin API", cause=e) from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Admin API rejected credentials ({resp.status_code})")
        try:
            resp.raise_for_status()
            result = resp.json()
        except (requests.HTTPError, ValueError) as e:
            logger.error("GraphQL bad response: %s", e)
            raise RemoteAPIError("Failed to fetch products.", cause=e) from e

        if not isinstance(result, dict):
            logger.error("GraphQL response is not an object: %r", type(result).__name__)
            raise RemoteAPIError(
                "Failed to fetch products.",
                cause=TypeError("GraphQL response is not a JSON object"),
            )

        errors = result.get("errors")
        if errors:
            logger.error("GraphQL errors: %s", errors)
            messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]
            raise RemoteAPIError("Failed to fetch products.", cause=RuntimeError("; ".join(messages)))

        return result.get("data") or {}

    def close(self) -> None:
        self._session.close()


def iter_catalog_pages(
    admin: ShopifyAdminClient,
    page_size: int = PRODUCTS_PAGE_SIZE,
    after: Optional[str] = None,
) -> Iterator[List[Dict[str, Any]]]:
    """
    Ленивый проход по страницам товаров.
    Каждая итерация -> список node. Стоп на hasNextPage = false.
    Продолжить с места можно, передав cursor последнего edge в after.
    """
    cursor = after
    while True:
        variables: Dict[str, Any] = {"first": page_size}
        if cursor:
            variables["after"] = cursor
        data = admin.execute_graphql(PRODUCTS_QUERY, variables)
        products = (data.get("products") if isinstance(data, dict) else None) or {}
        edges = (products.get("edges") if isinstance(products, dict) else None) or []
        if (
            not isinstance(products, dict)
            or not isinstance(edges, list)
            or not all(isinstance(edge, dict) for edge in edges)
        ):
            raise RemoteAPIError(
                "Failed to fetch products.",
                cause=TypeError("Unexpected products connection shape"),
            )

        yield [edge.get("node") or {} for edge in edges]

        page_info = products.get("pageInfo") or {}
        has_next = isinstance(page_info, dict) and bool(page_info.get("hasNextPage"))
        if not has_next or not edges:
            return
        cursor = edges[-1].get("cursor")
        if not cursor:
            return
