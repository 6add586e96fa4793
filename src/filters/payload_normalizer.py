# src/filters/payload_normalizer.py

"""Turn unstable scrape-endpoint payloads into a ScrapedProduct.

The scraping backend has nested the product payload at different depths
across versions.  ``UNWRAP_STRATEGIES`` lists the known shapes, deepest
and most specific first; the first strategy that yields a value wins.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from src.config.settings import Settings
from src.models.scraped_product import DetailPair, ScrapedProduct

logger = logging.getLogger("listro.normalizer")

_MISSING = object()


def safe_get(tree: Any, path: str, default: Any = None) -> Any:
    """Follow a dotted path through nested mappings and sequences.

    Numeric segments index into sequences.  Returns *default* as soon as a
    segment is absent, or when the leaf itself is ``None``.
    """
    node = tree
    for part in path.split("."):
        if isinstance(node, Mapping):
            node = node.get(part, _MISSING)
        elif (
            isinstance(node, Sequence)
            and not isinstance(node, (str, bytes))
            and part.lstrip("-").isdigit()
        ):
            index = int(part)
            node = node[index] if -len(node) <= index < len(node) else _MISSING
        else:
            return default
        if node is _MISSING or node is None:
            return default
    return node


# ── Payload unwrapping ──────────────────────────────────


def _envelope_with_product(envelope: Any) -> Any:
    """``{product: ...}`` at the top level: the envelope is the payload."""
    if safe_get(envelope, "product") is not None:
        return envelope
    return None


def _triple_nested_data(envelope: Any) -> Any:
    return safe_get(envelope, "data.data.data")


def _double_nested_data(envelope: Any) -> Any:
    return safe_get(envelope, "data.data")


def _data_with_basic_information(envelope: Any) -> Any:
    if safe_get(envelope, "data.basic_information") is not None:
        return safe_get(envelope, "data")
    return None


def _plain_data(envelope: Any) -> Any:
    return safe_get(envelope, "data")


UNWRAP_STRATEGIES: tuple[Callable[[Any], Any], ...] = (
    _envelope_with_product,
    _triple_nested_data,
    _double_nested_data,
    _data_with_basic_information,
    _plain_data,
)


def unwrap_product_payload(envelope: Any) -> Any:
    """Return the first payload a strategy finds, else the envelope."""
    for strategy in UNWRAP_STRATEGIES:
        payload = strategy(envelope)
        if payload is not None:
            logger.debug("Product payload matched %s", strategy.__name__)
            return payload
    return envelope


# ── Field filters ───────────────────────────────────────


def _is_placeholder(value: Any) -> bool:
    """Falsy values and the literal placeholder strings count as absent."""
    if not value:
        return True
    return isinstance(value, str) and value in Settings.PLACEHOLDER_VALUES


def filter_valid_data(data: Any) -> dict[str, Any] | None:
    """Drop placeholder entries from a mapping; ``None`` if nothing is left."""
    if not isinstance(data, Mapping):
        return None
    filtered = {
        key: value
        for key, value in data.items()
        if not _is_placeholder(value)
    }
    return filtered or None


def filter_detail_pairs(pairs: Any) -> list[DetailPair]:
    """Keep ``{label, value}`` entries whose value is present and not N/A."""
    if not isinstance(pairs, list):
        return []
    return [
        pair
        for pair in pairs
        if isinstance(pair, Mapping)
        and pair.get("value")
        and pair.get("value") != "N/A"
    ]


def filter_images(images: Any) -> list[str]:
    """Keep non-empty string URLs with an http(s) scheme."""
    if not isinstance(images, list):
        return []
    return [
        img
        for img in images
        if isinstance(img, str) and img.startswith("http")
    ]


def filter_features(features: Any) -> list[str]:
    """Keep feature bullets that are not blank or N/A."""
    if not isinstance(features, list):
        return []
    return [
        feat
        for feat in features
        if isinstance(feat, str) and feat != "N/A" and feat.strip()
    ]


def find_labelled_value(pairs: Any, label: str) -> Any:
    """Return the value paired with *label* in a ``{label, value}`` list."""
    if not isinstance(pairs, list):
        return None
    for pair in pairs:
        if isinstance(pair, Mapping) and pair.get("label") == label:
            return pair.get("value")
    return None


# ── Assembly ────────────────────────────────────────────


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def normalize_scraped_product(
    payload: Mapping[str, Any],
    product_url: str,
) -> ScrapedProduct:
    """Build a ScrapedProduct from an unwrapped scrape payload.

    ``payload`` may carry ``product``, ``details`` and ``raw`` sections;
    when ``product`` is absent the payload itself is read as the product.
    """
    product = _as_mapping(payload.get("product") or payload)
    details = _as_mapping(payload.get("details"))
    raw = _as_mapping(payload.get("raw"))

    asin = (
        safe_get(product, "asin")
        or safe_get(raw, "manufacturingDetails.ASIN")
        or find_labelled_value(details.get("manufacturingDetails"), "ASIN")
    )
    brand = (
        safe_get(product, "brand")
        or safe_get(raw, "productDetails.Brand")
    )

    return ScrapedProduct(
        url=product_url,
        asin=asin or None,
        title=safe_get(product, "title"),
        brand=brand or None,
        description=safe_get(product, "description"),
        images=filter_images(product.get("images")),
        features=filter_features(details.get("featureBullets")),
        product_details=filter_valid_data(raw.get("productDetails")),
        manufacturing_details=filter_valid_data(
            raw.get("manufacturingDetails")
        ),
        additional_info=filter_valid_data(raw.get("additionalInfo")),
        product_details_array=filter_detail_pairs(
            details.get("productDetails")
        ),
        manufacturing_details_array=filter_detail_pairs(
            details.get("manufacturingDetails")
        ),
        additional_info_array=filter_detail_pairs(
            details.get("additionalInfo")
        ),
        raw_data=dict(payload),
    )
