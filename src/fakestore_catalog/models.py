"""Product models for Fakestore Catalog."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawProduct(BaseModel):
    """A product as received from the API.

    Every field is optional; consumers fall back to zero values. Text
    fields accept any JSON value and keep its text form. Only ``id`` and
    ``price`` must be numeric.
    """

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    title: str | None = None
    price: float | None = Field(default=None, allow_inf_nan=False)
    category: str | None = None
    description: Any = None  # never read

    @field_validator("title", "category", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)


class EnrichedProduct(BaseModel):
    """A product with derived discount, stock and popularity fields."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    title: str = ""
    original_price: float = Field(default=0.0, alias="originalPrice")
    discounted_price: float = Field(default=0.0, alias="discountedPrice")
    stock: int = 0
    popularity_score: float = Field(default=0.0, alias="popularityScore")

    def to_record(self) -> dict:
        """Serialize with the external (camelCase) field names."""
        return self.model_dump(by_alias=True)


# External field names, in output order
PRODUCT_FIELDS = [field.alias or name for name, field in EnrichedProduct.model_fields.items()]

# category -> products sorted by descending original price
GroupedCatalog = dict[str, list[EnrichedProduct]]
