# src/models/scraped_product.py

"""Normalized product returned by the scrape endpoint."""

from dataclasses import dataclass, field
from typing import Any

DetailPair = dict[str, Any]


@dataclass
class ScrapedProduct:
    """A scraped product flattened for display.

    ``raw_data`` keeps the unwrapped backend payload untouched so the UI
    can show fields the normalizer does not know about.
    """

    url: str
    asin: str | None = None
    title: str | None = None
    brand: str | None = None
    description: str | None = None
    images: list[str] = field(default_factory=lambda: list[str]())
    features: list[str] = field(default_factory=lambda: list[str]())
    product_details: dict[str, Any] | None = None
    manufacturing_details: dict[str, Any] | None = None
    additional_info: dict[str, Any] | None = None
    product_details_array: list[DetailPair] = field(
        default_factory=lambda: list[DetailPair]()
    )
    manufacturing_details_array: list[DetailPair] = field(
        default_factory=lambda: list[DetailPair]()
    )
    additional_info_array: list[DetailPair] = field(
        default_factory=lambda: list[DetailPair]()
    )
    raw_data: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any]()
    )

    def to_dict(self) -> dict[str, Any]:
        """Render with the camelCase keys the UI components read."""
        return {
            "asin": self.asin,
            "title": self.title,
            "brand": self.brand,
            "url": self.url,
            "images": list(self.images),
            "features": list(self.features),
            "description": self.description,
            "productDetails": self.product_details,
            "manufacturingDetails": self.manufacturing_details,
            "additionalInfo": self.additional_info,
            "productDetailsArray": list(self.product_details_array),
            "manufacturingDetailsArray": list(
                self.manufacturing_details_array
            ),
            "additionalInfoArray": list(self.additional_info_array),
            "rawData": self.raw_data,
        }
