"""
Request Models

Pydantic models for form posts and the JSON cart API.
"""
from typing import Annotated, Optional, Union

from pydantic import BaseModel, Field, field_validator

from goblin_store.cart import Product


class ProductPayload(BaseModel):
    name: str = Field(min_length=1)
    price: Union[
        Annotated[int, Field(ge=0)],
        Annotated[float, Field(ge=0, allow_inf_nan=False)],
    ]
    image: str = ""

    def to_product(self) -> Product:
        return Product(name=self.name, price=self.price, image=self.image)


class ProductForm(ProductPayload):
    # Where to send the browser after the action
    next: Optional[str] = None


class CheckoutForm(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1, max_length=500)

    @field_validator("name", "address", mode="before")
    @classmethod
    def strip_whitespace(cls, value):
        return value.strip() if isinstance(value, str) else value


class CartResponse(BaseModel):
    products: list[dict]
    total: float
    count: int
