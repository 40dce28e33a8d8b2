"""
Product Catalog

Products sold in the shop and their optional add-ons. Prices are whole KRW.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from services.errors import UnknownProductError

CURRENCY = 'krw'
DEFAULT_PRODUCT_ID = 'verume'


@dataclass(frozen=True)
class AddOn:
    """Optional secondary line item attached to a product"""
    id: str
    name: str
    unit_price: int


@dataclass(frozen=True)
class Product:
    """Configurable product with an optional add-on"""
    id: str
    name: str
    tagline: str
    unit_price: int
    image: str
    add_on: Optional[AddOn] = None

    @property
    def add_on_price(self) -> int:
        return self.add_on.unit_price if self.add_on else 0


LIGHT_MODULE = AddOn(id='light-module', name='Light Module', unit_price=29000)

PRODUCTS: Dict[str, Product] = {
    'verume': Product(
        id='verume',
        name='verumé',
        tagline='Objects for Spatial Density',
        unit_price=248000,
        image='images/verume.svg',
        add_on=LIGHT_MODULE,
    ),
}


def get_product(product_id: Optional[str]) -> Product:
    """
    Look up a product by id

    Args:
        product_id: Catalog id; empty means the default product

    Returns:
        The matching Product

    Raises:
        UnknownProductError: if the id is not in the catalog
    """
    key = (product_id or DEFAULT_PRODUCT_ID).strip().lower()
    product = PRODUCTS.get(key)
    if product is None:
        raise UnknownProductError(product_id)
    return product
