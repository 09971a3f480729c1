"""
Order intent models.

The order intent is the buyer's checkout selection (product, variant,
contact details) captured before the payment redirect. It travels inside
a signed order-session token and is never persisted on its own.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

ORDER_INTENT_SCHEMA_VERSION = 1


class Variant(BaseModel):
    """Selected product variant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(min_length=1, max_length=100)
    duration: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(gt=0)
    original_price: Decimal | None = Field(default=None, gt=0)
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, lt=100)


class OrderIntent(BaseModel):
    """
    Immutable checkout selection.

    A product is referenced either by its identifier (``product``) or by
    its catalog ``platform`` + ``product_type`` pair. To change anything,
    issue a new token.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: Literal[1] = ORDER_INTENT_SCHEMA_VERSION

    # Product reference
    product: str | None = Field(default=None, min_length=1, max_length=100)
    platform: str | None = Field(default=None, min_length=1, max_length=100)
    product_type: str | None = Field(default=None, min_length=1, max_length=100)

    variant: Variant

    # Top-up specific choices
    amount: str | None = Field(default=None, max_length=100)
    level: str | None = Field(default=None, max_length=100)
    diamonds: str | None = Field(default=None, max_length=100)
    storage: str | None = Field(default=None, max_length=100)

    # Buyer contact
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)

    @model_validator(mode="after")
    def check_product_reference(self) -> "OrderIntent":
        """Require a product identifier or a platform + product type pair."""
        if self.product is None and not (self.platform and self.product_type):
            raise ValueError("product or platform and product_type required")
        return self
