from typing import Any, Dict, Iterator, List, Optional
import logging

import httpx
from pydantic import ValidationError

from .exceptions import ShopifyClientError, ShopifyHTTPError, ShopifyRateLimitError, ShopifyValidationError
from .models import OrdersPage

logger = logging.getLogger(__name__)


class ShopifyClient:
    """
    Client for the Shopify Admin REST orders endpoint.

    Pages are fetched one at a time; each request carries the `page_info`
    cursor taken from the previous response's `Link: <...>; rel="next"` header.

    Example:
        >>> with ShopifyClient("my-shop.myshopify.com", "shpat_...") as client:
        ...     orders = client.fetch_all_orders()
    """

    def __init__(
        self,
        store: str,
        access_token: str,
        *,
        api_version: str = "2024-01",
        page_limit: int = 250,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        host = store.split("://", 1)[-1].rstrip("/")
        self.base_url = f"https://{host}/admin/api/{api_version}"
        self.page_limit = page_limit
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "X-Shopify-Access-Token": access_token,
                "Content-Type": "application/json",
            },
        )

    def fetch_page(self, page_info: Optional[str] = None) -> OrdersPage:
        url = f"{self.base_url}/orders.json"
        params: Dict[str, Any] = {"limit": self.page_limit}
        if page_info:
            # Cursor requests accept no filters besides limit.
            params["page_info"] = page_info
        else:
            params["status"] = "any"

        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as e:
            raise ShopifyClientError(f"Request failed: {e}") from e

        if response.status_code == 429:
            raise ShopifyRateLimitError("Rate limit exceeded. Please retry later.")

        if not response.is_success:
            raise ShopifyHTTPError(f"Unexpected status code: {response.status_code}")

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError("response body is not an object")
            return OrdersPage(orders=data.get("orders"), next_page_info=self._next_page_info(response))
        except (ValueError, ValidationError) as e:
            raise ShopifyValidationError(f"Invalid response format: {e}") from e

    def iter_pages(self) -> Iterator[List[Dict[str, Any]]]:
        page_info: Optional[str] = None
        page_no = 0
        while True:
            page = self.fetch_page(page_info)
            page_no += 1
            logger.debug("Fetched page %d with %d orders", page_no, len(page.orders))
            yield page.orders

            page_info = page.next_page_info
            if not page_info:
                break

    def fetch_all_orders(self) -> List[Dict[str, Any]]:
        all_orders: List[Dict[str, Any]] = []
        for orders in self.iter_pages():
            all_orders.extend(orders)

        return all_orders

    @staticmethod
    def _next_page_info(response: httpx.Response) -> Optional[str]:
        nxt = response.links.get("next")
        if not nxt or not nxt.get("url"):
            return None

        return httpx.URL(nxt["url"]).params.get("page_info")

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
