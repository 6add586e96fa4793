# src/filters/category_filter.py

"""Sheet-row filtering by category name."""

import logging

from src.config.settings import Settings
from src.models.seller_listing import SheetRow

logger = logging.getLogger("listro.filters")


class CategoryFilter:
    """Filter sheet rows down to a single category."""

    @staticmethod
    def filter_rows(
        rows: list[SheetRow],
        category: str | None,
    ) -> list[SheetRow]:
        """Keep rows whose ``Category`` matches, ignoring case.

        A missing category or the "All Categories" sentinel keeps every row.
        """
        if not category or category == Settings.ALL_CATEGORIES:
            return rows

        wanted = category.lower()
        kept = [
            row
            for row in rows
            if isinstance(row.get("Category"), str)
            and row["Category"]
            and row["Category"].lower() == wanted
        ]

        logger.info(
            "Category '%s' kept %d of %d sheet rows",
            category,
            len(kept),
            len(rows),
        )
        return kept
