# src/models/seller_listing.py

"""Display row derived from one sheet-data row."""

from dataclasses import dataclass
from typing import Any

SheetRow = dict[str, Any]


@dataclass
class SellerListing:
    """A seller listing built client-side from a sheet row.

    ``rating`` and ``reviews`` are random placeholders, not backend data.
    ``product_id`` is only unique within the call that produced it.
    """

    product_id: str
    product_name: str
    category: str
    rating: float
    reviews: int
    availability: str = "In Stock"
    url: str = ""
    gender: str = ""
    age_group: str = ""
    subcategory: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Render with the camelCase keys the UI components read."""
        return {
            "productID": self.product_id,
            "productName": self.product_name,
            "category": self.category,
            "rating": self.rating,
            "reviews": self.reviews,
            "availability": self.availability,
            "url": self.url,
            "gender": self.gender,
            "ageGroup": self.age_group,
            "subcategory": self.subcategory,
        }
