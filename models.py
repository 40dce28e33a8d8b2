"""
Data Models for the xatom.space Storefront

Pydantic models for request validation on both the server endpoints and
the HTTP clients.
"""
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from services.configurator import MAX_QUANTITY, MIN_QUANTITY
from services.pricing import ProductConfiguration


class CheckoutRequest(BaseModel):
    """Checkout session request; also accepts the legacy qty/lightModule/lightQty names"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: Optional[str] = Field(
        None,
        max_length=100,
        validation_alias=AliasChoices('productId', 'product_id'),
    )
    quantity: int = Field(
        MIN_QUANTITY,
        ge=MIN_QUANTITY,
        le=MAX_QUANTITY,
        validation_alias=AliasChoices('quantity', 'qty'),
    )
    add_on_selected: bool = Field(
        False,
        validation_alias=AliasChoices('addOnSelected', 'lightModule', 'add_on_selected'),
    )
    add_on_quantity: int = Field(
        0,
        ge=0,
        le=MAX_QUANTITY,
        validation_alias=AliasChoices('addOnQuantity', 'lightQty', 'add_on_quantity'),
    )

    @model_validator(mode='after')
    def add_on_quantity_when_selected(self):
        """A selected add-on needs at least one unit"""
        if self.add_on_selected and self.add_on_quantity < MIN_QUANTITY:
            raise ValueError(f'addOnQuantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}')
        return self

    @classmethod
    def from_configuration(cls, config: ProductConfiguration) -> 'CheckoutRequest':
        return cls(
            product_id=config.product_id,
            quantity=config.quantity,
            add_on_selected=config.add_on_selected,
            add_on_quantity=config.add_on_quantity,
        )

    def to_configuration(self, product_id: str) -> ProductConfiguration:
        return ProductConfiguration(
            product_id=product_id,
            quantity=self.quantity,
            add_on_selected=self.add_on_selected,
            add_on_quantity=max(self.add_on_quantity, MIN_QUANTITY),
        )

    def to_payload(self) -> dict:
        """Wire format sent to POST /api/checkout"""
        return {
            'productId': self.product_id,
            'quantity': self.quantity,
            'addOnSelected': self.add_on_selected,
            'addOnQuantity': self.add_on_quantity if self.add_on_selected else 0,
        }


CONTACT_REQUIRED = 'All fields are required.'


class ContactMessage(BaseModel):
    """Contact form submission; every field is required and non-blank"""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=1, max_length=320)
    message: str = Field(..., min_length=1, max_length=5000)

    @staticmethod
    def describe_error(exc) -> str:
        """
        User-facing message for a failed ContactMessage validation

        Args:
            exc: pydantic ValidationError raised by the model

        Returns:
            'All fields are required.' for missing or blank fields, otherwise
            a length message naming the first offending field
        """
        errors = exc.errors()
        if not errors or any(err.get('type') != 'string_too_long' for err in errors):
            return CONTACT_REQUIRED
        err = errors[0]
        field = '.'.join(str(part) for part in err.get('loc', ()))
        limit = err.get('ctx', {}).get('max_length')
        return f'{field} is too long (max {limit} characters).'
