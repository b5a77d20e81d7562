"""Product enrichment and grouping for Fakestore Catalog."""

import logging
import random
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from .config import CatalogConfig
from .models import EnrichedProduct, GroupedCatalog, RawProduct

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that can draw an integer from an inclusive range.

    ``random.Random`` satisfies this protocol.
    """

    def randint(self, a: int, b: int) -> int: ...


class Transformer:
    """Enriches raw products and groups them by category."""

    def __init__(self, config: CatalogConfig | None = None, rng: RandomSource | None = None):
        self.config = config or CatalogConfig()
        self.rng = rng or random.Random()

    def enrich(self, product: RawProduct) -> EnrichedProduct:
        """Add discount, stock and popularity score to a product."""
        price = product.price or 0.0
        discount = self.rng.randint(self.config.min_discount, self.config.max_discount)
        stock = self.rng.randint(self.config.min_stock, self.config.max_stock)
        # Popularity uses its own stock draw, not `stock`
        stock_sample = self.rng.randint(self.config.min_stock, self.config.max_stock)

        return EnrichedProduct(
            id=product.id or 0,
            title=product.title or "",
            original_price=price,
            discounted_price=round(price * (1 - discount / 100), 2),
            stock=stock,
            popularity_score=round((price + stock_sample) / 2, 2),
        )

    def transform(self, products: Iterable[RawProduct | Mapping[str, Any]]) -> GroupedCatalog:
        """
        Group products by category, most expensive first, and enrich them.

        Args:
            products: Raw products, or plain mappings with the API field names

        Returns:
            Category -> enriched products. Categories keep first-seen order.
        """
        groups: dict[str, list[RawProduct]] = {}
        for product in products:
            if not isinstance(product, RawProduct):
                product = RawProduct.model_validate(product)
            groups.setdefault(product.category or "", []).append(product)

        catalog: GroupedCatalog = {}
        for category, members in groups.items():
            ordered = sorted(members, key=lambda p: p.price or 0.0, reverse=True)
            catalog[category] = [self.enrich(p) for p in ordered]

        total = sum(len(items) for items in catalog.values())
        logger.info(f"Products transformed successfully ({total} products, {len(catalog)} categories)")
        return catalog
