# src/services/backend_gateway.py

"""Async client for the data/scraping backend and the AI backend.

Every public coroutine is one request/response round trip: build the URL,
send, parse the JSON envelope, check it, and hand back either the body or
a normalized object.  Any failure surfaces as :class:`RemoteError` with a
call-specific prefix; the cause is chained and logged.
"""

import asyncio
import json
import logging
import mimetypes
import random
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from curl_cffi import CurlMime
from curl_cffi import requests as curl_requests

from src.config.settings import API_URL, GatewayConfig, Settings
from src.filters.category_filter import CategoryFilter
from src.filters.payload_normalizer import (
    normalize_scraped_product,
    unwrap_product_payload,
)
from src.models.scraped_product import ScrapedProduct
from src.models.seller_listing import SellerListing, SheetRow

__all__ = ["API_URL", "BackendGateway", "RemoteError"]


class RemoteError(Exception):
    """A backend call failed; ``message`` is safe to show to end users."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _is_ok(resp: curl_requests.Response) -> bool:
    """Transport success means any 2xx status."""
    return 200 <= resp.status_code < 300


def _error_text(body: Any, fallback: str) -> str:
    """Prefer the envelope's ``error`` field over our own wording."""
    if isinstance(body, Mapping) and body.get("error"):
        return str(body["error"])
    return fallback


def _check_envelope(
    resp: curl_requests.Response,
    body: Any,
    transport_message: str,
    app_message: str,
) -> dict[str, Any]:
    """Require both a 2xx status and ``success: true``."""
    if not _is_ok(resp):
        raise RemoteError(_error_text(body, transport_message))
    if not isinstance(body, Mapping) or not body.get("success"):
        raise RemoteError(_error_text(body, app_message))
    return dict(body)


def _cell(row: SheetRow, key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value)


def listing_from_row(
    row: SheetRow, index: int, stamp_ms: int,
) -> SellerListing:
    """Build a display listing; rating and reviews are placeholders."""
    category = _cell(row, "Category")
    subcategory = _cell(row, "Subcategory")
    gender = _cell(row, "Gender")
    age_group = _cell(row, "Age Group")
    return SellerListing(
        product_id=f"API-{stamp_ms}-{index}",
        product_name=(
            f"{category} - {subcategory} ({gender}, {age_group})"
        ),
        category=category,
        rating=round(random.uniform(3.0, 5.0), 1),
        reviews=random.randint(100, 10099),
        availability="In Stock",
        url=_cell(row, "URL"),
        gender=gender,
        age_group=age_group,
        subcategory=subcategory,
    )


class BackendGateway:
    """Stateless request functions against the two configured backends."""

    def __init__(self, config: GatewayConfig | None = None) -> None:
        self.config = config or GatewayConfig.from_settings()
        self.logger = logging.getLogger("listro.gateway")

    # ── Transport ────────────────────────────────────────

    def _primary(self, path: str) -> str:
        return f"{self.config.primary_base_url}{path}"

    def _ai(self, path: str) -> str:
        return f"{self.config.ai_base_url}{path}"

    async def _send(
        self,
        method: str,
        url: str,
        json_body: dict[str, Any] | None = None,
        multipart: CurlMime | None = None,
    ) -> tuple[curl_requests.Response, Any]:
        """Issue one request on a fresh session and decode the JSON body."""
        async with curl_requests.AsyncSession() as session:
            resp = await session.request(
                method,
                url,
                headers=Settings.DEFAULT_HEADERS,
                json=json_body,
                multipart=multipart,
                timeout=self.config.request_timeout,
            )
        self.logger.debug(
            "%s %s -> HTTP %d", method, url, resp.status_code
        )
        return resp, resp.json()

    # ── Sheet data ───────────────────────────────────────

    async def fetch_sheet_data(self) -> dict[str, Any]:
        """GET the seller sheet; the body is returned as-is."""
        url = self._primary("/api/sheet-data")
        self.logger.info("Fetching sheet data from %s", url)
        try:
            resp, body = await self._send("GET", url)
            return _check_envelope(
                resp,
                body,
                "Failed to fetch sheet data",
                "API returned error",
            )
        except Exception as exc:
            self.logger.error(
                "Error fetching sheet data: %s", exc, exc_info=True
            )
            raise RemoteError(f"Failed to fetch data: {exc}") from exc

    async def fetch_golden_sheet_data(self) -> dict[str, Any]:
        """GET the golden sheet used for filter and header metadata."""
        url = self._primary("/api/golden-sheet-data")
        self.logger.info("Fetching golden sheet data from %s", url)
        try:
            resp, body = await self._send("GET", url)
            data = _check_envelope(
                resp,
                body,
                "Failed to fetch golden sheet data",
                "API returned error",
            )
        except Exception as exc:
            self.logger.error(
                "Error fetching golden sheet data: %s", exc, exc_info=True
            )
            raise RemoteError(
                f"Failed to fetch golden sheet data: {exc}"
            ) from exc

        self.logger.info(
            "Golden sheet data fetched: totalRows=%s fromCache=%s "
            "headers=%s",
            data.get("totalRows"),
            data.get("fromCache"),
            data.get("headers"),
        )
        return data

    async def fetch_seller_data(
        self, category: str | None,
    ) -> list[SellerListing]:
        """Sheet rows for *category* mapped to display listings."""
        self.logger.info("Fetching seller data for category: %s", category)
        try:
            sheet = await self.fetch_sheet_data()
            rows: list[SheetRow] = sheet.get("data") or []
            rows = CategoryFilter.filter_rows(rows, category)
            stamp_ms = int(time.time() * 1000)
            return [
                listing_from_row(row, index, stamp_ms)
                for index, row in enumerate(rows)
            ]
        except Exception as exc:
            self.logger.error(
                "Error fetching seller data for %s: %s",
                category,
                exc,
                exc_info=True,
            )
            raise RemoteError(
                f"Failed to fetch data for {category}: {exc}"
            ) from exc

    # ── Scraping ─────────────────────────────────────────

    async def scrape_product_from_url(
        self, product_url: str,
    ) -> ScrapedProduct:
        """Ask the backend to scrape *product_url* and normalize the result.

        The URL is forwarded unvalidated; the backend decides what it
        accepts.
        """
        self.logger.info("Scraping product data from URL: %s", product_url)
        try:
            resp, body = await self._send(
                "POST",
                self._primary("/api/scrape-product"),
                json_body={"url": product_url},
            )
            envelope = _check_envelope(
                resp,
                body,
                "Failed to scrape product data",
                "Scraping failed",
            )

            payload = unwrap_product_payload(envelope)
            if not isinstance(payload, Mapping) or not payload:
                raise RemoteError("No product data found in response")
            self.logger.debug("Raw scraped data: %s", payload)

            product = normalize_scraped_product(payload, product_url)
        except Exception as exc:
            self.logger.error(
                "Error scraping product: %s", exc, exc_info=True
            )
            raise RemoteError(f"Failed to scrape product: {exc}") from exc

        self.logger.info(
            "Product scraped: title=%r asin=%s brand=%s images=%d",
            product.title,
            product.asin,
            product.brand,
            len(product.images),
        )
        return product

    # ── AI generation ────────────────────────────────────

    async def _generate_text(
        self,
        kind: str,
        subcategory: str,
        product_details: Mapping[str, Any] | None,
    ) -> str | None:
        """POST a title/description request; detail fields sit top-level."""
        payload: dict[str, Any] = {
            "subcategory": subcategory,
            "type": kind,
            **(product_details or {}),
        }
        self.logger.info(
            "Generating AI product %s with: %s", kind, payload
        )
        resp, body = await self._send(
            "POST",
            self._ai("/api/generate-title-description"),
            json_body=payload,
        )
        if (
            not _is_ok(resp)
            or not isinstance(body, Mapping)
            or not body.get("success")
        ):
            raise RemoteError(
                _error_text(body, f"{kind.capitalize()} generation failed")
            )
        generated = body.get(f"generated_{kind}")
        self.logger.info("AI product %s generated: %r", kind, generated)
        return generated

    async def generate_product_title(
        self,
        subcategory: str,
        product_details: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Return ``generated_title`` for the given subcategory/details."""
        try:
            return await self._generate_text(
                "title", subcategory, product_details
            )
        except Exception as exc:
            self.logger.error(
                "Error generating AI product title: %s", exc, exc_info=True
            )
            raise RemoteError(
                f"Failed to generate product title: {exc}"
            ) from exc

    async def generate_product_description(
        self,
        subcategory: str,
        product_details: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Return ``generated_description`` for the given subcategory/details."""
        try:
            return await self._generate_text(
                "description", subcategory, product_details
            )
        except Exception as exc:
            self.logger.error(
                "Error generating AI product description: %s",
                exc,
                exc_info=True,
            )
            raise RemoteError(
                f"Failed to generate product description: {exc}"
            ) from exc

    async def generate_product_copy(
        self,
        subcategory: str,
        product_details: Mapping[str, Any] | None = None,
    ) -> tuple[str | None, str | None]:
        """Request title and description concurrently."""
        title, description = await asyncio.gather(
            self.generate_product_title(subcategory, product_details),
            self.generate_product_description(subcategory, product_details),
        )
        return title, description

    @staticmethod
    def _add_image_part(
        mime: CurlMime,
        image_file: str | Path | bytes,
        filename: str | None,
    ) -> None:
        """Attach the source image as the ``image`` form field."""
        if isinstance(image_file, bytes):
            name = filename or "image"
            content_type = (
                mimetypes.guess_type(name)[0] or "application/octet-stream"
            )
            mime.addpart(
                name="image",
                content_type=content_type,
                filename=name,
                data=image_file,
            )
            return

        path = Path(image_file)
        if not path.is_file():
            raise FileNotFoundError(f"Image file not found: {path}")
        name = filename or path.name
        mime.addpart(
            name="image",
            content_type=(
                mimetypes.guess_type(name)[0] or "application/octet-stream"
            ),
            filename=name,
            local_path=str(path),
        )

    async def generate_ai_image(
        self,
        image_file: str | Path | bytes,
        style_index: int | str,
        attributes: Mapping[str, Any] | None = None,
        filename: str | None = None,
    ) -> str:
        """Upload an image for restyling and return the result's URL.

        Only the HTTP status is checked here: the image endpoint does not
        send a ``success`` flag.
        """
        attributes = dict(attributes or {})
        self.logger.info(
            "Generating AI image with style=%s attributes=%s",
            style_index,
            attributes,
        )
        try:
            mime = CurlMime()
            try:
                self._add_image_part(mime, image_file, filename)
                mime.addpart(
                    name="style_index", data=str(style_index).encode()
                )
                mime.addpart(
                    name="attributes",
                    data=json.dumps(attributes).encode(),
                )
                resp, body = await self._send(
                    "POST", self._ai("/generate-image"), multipart=mime
                )
            finally:
                mime.close()

            if not _is_ok(resp):
                raise RemoteError(_error_text(body, "Server error"))

            data = body if isinstance(body, Mapping) else {}
            if data.get("gcs_url"):
                image_url = str(data["gcs_url"])
            elif data.get("filename"):
                image_url = self._ai(f"/generated_images/{data['filename']}")
            else:
                raise RemoteError("No image URL returned from server")
        except Exception as exc:
            self.logger.error(
                "Error generating AI image: %s", exc, exc_info=True
            )
            raise RemoteError(f"Failed to generate AI image: {exc}") from exc

        self.logger.info("AI image generated: %s", image_url)
        return image_url
