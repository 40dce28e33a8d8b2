"""
Pricing Model

Pure price computation for a product configuration.
"""
from dataclasses import dataclass

from services.catalog import Product


@dataclass(frozen=True)
class ProductConfiguration:
    """Snapshot of a product selection at one point in time"""
    product_id: str
    quantity: int = 1
    add_on_selected: bool = False
    add_on_quantity: int = 1

    @property
    def effective_add_on_quantity(self) -> int:
        """Add-on quantity that counts toward the order (0 when not selected)"""
        return self.add_on_quantity if self.add_on_selected else 0


@dataclass(frozen=True)
class PriceQuote:
    """Derived totals for a configuration"""
    base_subtotal: int
    add_on_subtotal: int
    total: int

    def to_dict(self) -> dict:
        return {
            'baseSubtotal': self.base_subtotal,
            'addOnSubtotal': self.add_on_subtotal,
            'total': self.total,
            'formatted': format_krw(self.total),
        }


def compute_total(config: ProductConfiguration, base_price_per_unit: int, add_on_price_per_unit: int) -> int:
    """
    Compute the order total for a configuration

    The stored add-on quantity is ignored unless the add-on is selected.

    Args:
        config: Configuration with already-clamped quantities
        base_price_per_unit: Unit price of the base item
        add_on_price_per_unit: Unit price of the add-on

    Returns:
        Total in whole currency units
    """
    return quote(config, base_price_per_unit, add_on_price_per_unit).total


def quote(config: ProductConfiguration, base_price_per_unit: int, add_on_price_per_unit: int) -> PriceQuote:
    base_subtotal = base_price_per_unit * config.quantity
    add_on_subtotal = add_on_price_per_unit * config.effective_add_on_quantity
    return PriceQuote(
        base_subtotal=base_subtotal,
        add_on_subtotal=add_on_subtotal,
        total=base_subtotal + add_on_subtotal,
    )


def quote_for(config: ProductConfiguration, product: Product) -> PriceQuote:
    """Price a configuration with the catalog prices of its product"""
    return quote(config, product.unit_price, product.add_on_price)


def format_krw(amount: int) -> str:
    """Format an amount with thousands separators, e.g. 583000 -> '583,000'"""
    return f'{int(amount):,}'
