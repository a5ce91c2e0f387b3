from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .columns import default_mapping
from .config import ExportSettings
from .core.engine import EngineConfig, OrderFlattener
from .core.exceptions import MappingError
from .core.io import serialize_csv
from .delivery.exceptions import DeliveryError
from .delivery.sftp import SftpUploader, export_filename, remote_path_for
from .rest.client import ShopifyClient
from .rest.exceptions import ShopifyClientError

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    status: str  # "delivered" | "no_orders" | "fetch_failed" | "flatten_failed" | "delivery_failed" | "failed"
    orders: int = 0
    rows: int = 0
    remote_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in ("delivered", "no_orders")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ExportJob:
    """
    One export run: fetch orders, flatten, serialize, upload.

    `run()` never raises; each failing phase is logged and reported in the
    returned ExportResult so a scheduler keeps firing later runs.
    """

    def __init__(
        self,
        *,
        fetch_orders: Callable[[], List[Dict[str, Any]]],
        flattener: OrderFlattener,
        uploader: SftpUploader,
        remote_base_path: str,
        quote_all: bool = False,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self.fetch_orders = fetch_orders
        self.flattener = flattener
        self.uploader = uploader
        self.remote_base_path = remote_base_path
        self.quote_all = quote_all
        self.today = today

    @classmethod
    def from_settings(cls, settings: ExportSettings) -> "ExportJob":
        def fetch_orders() -> List[Dict[str, Any]]:
            with ShopifyClient(
                settings.shopify_store,
                settings.shopify_access_token,
                api_version=settings.shopify_api_version,
                page_limit=settings.shopify_page_limit,
                timeout=settings.shopify_timeout,
            ) as client:
                return client.fetch_all_orders()

        flattener = OrderFlattener(
            default_mapping(),
            config=EngineConfig(on_error=settings.on_error, logger=logger),
        )
        uploader = SftpUploader(
            settings.sftp_host,
            settings.sftp_user,
            settings.sftp_password,
            port=settings.sftp_port,
            timeout=settings.sftp_timeout,
            strict_host_key=settings.sftp_strict_host_key,
        )
        return cls(
            fetch_orders=fetch_orders,
            flattener=flattener,
            uploader=uploader,
            remote_base_path=settings.sftp_remote_path,
            quote_all=settings.quote_all,
        )

    def run(self) -> ExportResult:
        try:
            return self._run()
        except Exception as exc:
            logger.exception("Job failed: %s", exc)
            return ExportResult(status="failed", error=str(exc))

    def _run(self) -> ExportResult:
        logger.info("Starting export job...")

        try:
            orders = self.fetch_orders()
        except ShopifyClientError as exc:
            logger.error("Error fetching Shopify orders: %s", exc)
            return ExportResult(status="fetch_failed", error=str(exc))

        if not orders:
            logger.info("No orders found.")
            return ExportResult(status="no_orders")

        logger.info("Fetched %d orders", len(orders))

        try:
            rows = self.flattener.flatten(orders)
            payload = serialize_csv(rows, self.flattener.columns, quote_all=self.quote_all)
        except MappingError as exc:
            logger.error("Error flattening orders: %s", exc)
            return ExportResult(status="flatten_failed", orders=len(orders), error=str(exc))

        filename = export_filename(self.today())
        remote_path = remote_path_for(self.remote_base_path, filename)
        logger.info("Flattened %d orders into %d rows; uploading %s", len(orders), len(rows), filename)

        try:
            self.uploader.deliver(payload, filename, remote_path)
        except DeliveryError as exc:
            logger.error("SFTP upload failed: %s", exc)
            return ExportResult(status="delivery_failed", orders=len(orders), rows=len(rows), error=str(exc))

        logger.info("File uploaded to SFTP.")
        return ExportResult(status="delivered", orders=len(orders), rows=len(rows), remote_path=remote_path)
