"""Product value type and the JSON codec for the persisted cart."""
import json
import math
from dataclasses import dataclass
from typing import Iterable, List, Union

Price = Union[int, float]


@dataclass(frozen=True)
class Product:
    """
    Catalog item as held by the cart.

    There is no identifier: two products are the same product when name,
    price and image are all equal.
    """
    name: str
    price: Price
    image: str

    def __post_init__(self):
        # 55.0 and 55 are the same JSON number; keep the int so it encodes as 55
        if isinstance(self.price, float) and self.price.is_integer():
            object.__setattr__(self, "price", int(self.price))

    def to_dict(self) -> dict:
        """Convert to dictionary (key order matches the stored JSON)."""
        return {
            "name": self.name,
            "price": self.price,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Product":
        """Create from dictionary, rejecting anything that is not a product."""
        if not isinstance(data, dict):
            raise ValueError(f"product must be an object, got {type(data).__name__}")
        try:
            name = data["name"]
            price = data["price"]
            image = data["image"]
        except KeyError as e:
            raise ValueError(f"product is missing field {e}") from e

        if not isinstance(name, str) or not isinstance(image, str):
            raise ValueError("product name and image must be strings")
        # bool is an int subclass; true/false is not a price
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError("product price must be a number")
        if isinstance(price, float) and not math.isfinite(price):
            raise ValueError("product price must be finite")
        if price < 0:
            raise ValueError("product price must be non-negative")

        return cls(name=name, price=price, image=image)


def encode_products(products: Iterable[Product]) -> str:
    """Serialize products the way JSON.stringify does: compact, ordered."""
    return json.dumps(
        [product.to_dict() for product in products],
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def decode_products(raw: str) -> List[Product]:
    """
    Parse a stored cart.

    Raises:
        ValueError: raw is not a JSON array of product objects
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise ValueError(f"stored cart is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ValueError("stored cart is not a list")

    return [Product.from_dict(item) for item in data]
