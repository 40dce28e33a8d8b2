"""
Order Configurator

Owns the adjustable selection for one product page visit and keeps the
quantities inside their bounds on every mutation.
"""
import logging
from typing import Dict, Optional

from services.catalog import Product
from services.pricing import PriceQuote, ProductConfiguration, quote_for

logger = logging.getLogger(__name__)

MIN_QUANTITY = 1
MAX_QUANTITY = 99

QUANTITY_FIELDS = ('quantity', 'add_on_quantity')

# Form action name -> (method, field)
ACTIONS = {
    'inc_qty': ('increment', 'quantity'),
    'dec_qty': ('decrement', 'quantity'),
    'inc_add_on': ('increment', 'add_on_quantity'),
    'dec_add_on': ('decrement', 'add_on_quantity'),
    'toggle_add_on': ('toggle_add_on', None),
}


def clamp_quantity(value) -> int:
    """Clamp a quantity into [MIN_QUANTITY, MAX_QUANTITY]"""
    try:
        value = int(value)
    except (TypeError, ValueError):
        return MIN_QUANTITY
    return max(MIN_QUANTITY, min(MAX_QUANTITY, value))


class OrderConfigurator:
    """Mutable product selection with a price quote that never lags the state"""

    def __init__(self, product: Product, quantity: int = 1,
                 add_on_selected: bool = False, add_on_quantity: int = 1):
        """
        Initialize configurator

        Args:
            product: Catalog product being configured
            quantity: Initial base quantity (clamped)
            add_on_selected: Whether the add-on starts selected
            add_on_quantity: Initial add-on quantity (clamped)
        """
        self.product = product
        self._quantity = clamp_quantity(quantity)
        self._add_on_selected = bool(add_on_selected) and product.add_on is not None
        self._add_on_quantity = clamp_quantity(add_on_quantity)
        self._quote = self._recompute()

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def add_on_selected(self) -> bool:
        return self._add_on_selected

    @property
    def add_on_quantity(self) -> int:
        return self._add_on_quantity

    @property
    def quote(self) -> PriceQuote:
        return self._quote

    @property
    def total(self) -> int:
        return self._quote.total

    def _recompute(self) -> PriceQuote:
        return quote_for(self.snapshot(), self.product)

    def _step(self, field: str, delta: int) -> int:
        if field not in QUANTITY_FIELDS:
            raise ValueError(f'Unknown quantity field: {field}')
        value = clamp_quantity(getattr(self, f'_{field}') + delta)
        setattr(self, f'_{field}', value)
        self._quote = self._recompute()
        return value

    def increment(self, field: str) -> int:
        """
        Increase a quantity by one, saturating at MAX_QUANTITY

        Args:
            field: 'quantity' or 'add_on_quantity'

        Returns:
            The new value
        """
        return self._step(field, 1)

    def decrement(self, field: str) -> int:
        """
        Decrease a quantity by one, saturating at MIN_QUANTITY

        Args:
            field: 'quantity' or 'add_on_quantity'

        Returns:
            The new value
        """
        return self._step(field, -1)

    def toggle_add_on(self) -> bool:
        """Flip the add-on selection; the add-on quantity is kept"""
        return self.set_add_on(not self._add_on_selected)

    def set_add_on(self, selected: bool) -> bool:
        if self.product.add_on is None:
            selected = False
        self._add_on_selected = bool(selected)
        self._quote = self._recompute()
        return self._add_on_selected

    def apply(self, action: str):
        """
        Apply a named form action

        Args:
            action: One of ACTIONS

        Raises:
            ValueError: if the action is unknown
        """
        if action not in ACTIONS:
            raise ValueError(f'Unknown action: {action}')
        method, field = ACTIONS[action]
        if field is None:
            getattr(self, method)()
        else:
            getattr(self, method)(field)
        logger.debug(f'{self.product.id}: {action} -> {self.snapshot()}')

    def snapshot(self) -> ProductConfiguration:
        """Immutable copy of the current selection"""
        return ProductConfiguration(
            product_id=self.product.id,
            quantity=self._quantity,
            add_on_selected=self._add_on_selected,
            add_on_quantity=self._add_on_quantity,
        )

    def to_session(self) -> Dict:
        return {
            'quantity': self._quantity,
            'add_on_selected': self._add_on_selected,
            'add_on_quantity': self._add_on_quantity,
        }

    @classmethod
    def from_session(cls, product: Product, data: Optional[Dict]) -> 'OrderConfigurator':
        """
        Restore a configurator from session data

        Missing or out-of-range values fall back to defaults or are clamped.
        """
        data = data or {}
        return cls(
            product,
            quantity=data.get('quantity', MIN_QUANTITY),
            add_on_selected=bool(data.get('add_on_selected', False)),
            add_on_quantity=data.get('add_on_quantity', MIN_QUANTITY),
        )
