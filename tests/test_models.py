# tests/test_models.py

"""Tests for the ScrapedProduct and SellerListing dataclasses."""

import unittest

from src.models.scraped_product import ScrapedProduct
from src.models.seller_listing import SellerListing


class TestScrapedProduct(unittest.TestCase):
    """ScrapedProduct defaults and rendering."""

    def test_defaults(self) -> None:
        """Only the URL is required."""
        product = ScrapedProduct(url="https://x/p")
        self.assertIsNone(product.asin)
        self.assertEqual(product.images, [])
        self.assertEqual(product.features, [])
        self.assertIsNone(product.product_details)
        self.assertEqual(product.product_details_array, [])
        self.assertEqual(product.raw_data, {})

    def test_mutable_defaults_not_shared(self) -> None:
        """Each instance gets its own lists."""
        a = ScrapedProduct(url="a")
        b = ScrapedProduct(url="b")
        a.images.append("http://img")
        self.assertEqual(b.images, [])

    def test_to_dict_uses_ui_keys(self) -> None:
        """to_dict renders camelCase keys."""
        product = ScrapedProduct(
            url="https://x/p",
            asin="B1",
            product_details={"Color": "Red"},
            additional_info_array=[{"label": "A", "value": "B"}],
            raw_data={"title": "T"},
        )
        data = product.to_dict()
        self.assertEqual(
            set(data),
            {
                "asin", "title", "brand", "url", "images", "features",
                "description", "productDetails", "manufacturingDetails",
                "additionalInfo", "productDetailsArray",
                "manufacturingDetailsArray", "additionalInfoArray",
                "rawData",
            },
        )
        self.assertEqual(data["productDetails"], {"Color": "Red"})
        self.assertEqual(
            data["additionalInfoArray"], [{"label": "A", "value": "B"}]
        )
        self.assertEqual(data["rawData"], {"title": "T"})


class TestSellerListing(unittest.TestCase):
    """SellerListing defaults and rendering."""

    def _make(self) -> SellerListing:
        return SellerListing(
            product_id="API-1-0",
            product_name="Shoes - Sneakers (Men, Adult)",
            category="Shoes",
            rating=4.2,
            reviews=512,
            url="https://x/s",
            gender="Men",
            age_group="Adult",
            subcategory="Sneakers",
        )

    def test_availability_default(self) -> None:
        """Listings are always in stock."""
        self.assertEqual(self._make().availability, "In Stock")

    def test_to_dict_uses_ui_keys(self) -> None:
        """to_dict renders productID, productName and ageGroup."""
        data = self._make().to_dict()
        self.assertEqual(data["productID"], "API-1-0")
        self.assertEqual(
            data["productName"], "Shoes - Sneakers (Men, Adult)"
        )
        self.assertEqual(data["ageGroup"], "Adult")
        self.assertEqual(data["availability"], "In Stock")

    def test_equality(self) -> None:
        """Two listings with identical fields are equal."""
        self.assertEqual(self._make(), self._make())


if __name__ == "__main__":
    unittest.main()
