"""
Checkout Session Service

Creates Stripe hosted-checkout sessions for a validated product configuration.
"""
import logging
from typing import Dict, List, Optional

import stripe

from services.catalog import CURRENCY, Product, get_product
from services.errors import CheckoutNotConfiguredError, CheckoutProviderError
from services.pricing import ProductConfiguration

logger = logging.getLogger(__name__)


class CheckoutService:
    """Builds line items from a configuration and opens a Stripe Checkout session"""

    def __init__(self, secret_key: Optional[str], base_price_id: Optional[str] = None,
                 add_on_price_id: Optional[str] = None, currency: str = CURRENCY):
        """
        Initialize checkout service

        Args:
            secret_key: Stripe secret API key (None means not configured)
            base_price_id: Stripe price id for the base item; inline price data is used when absent
            add_on_price_id: Stripe price id for the add-on; inline price data is used when absent
            currency: Currency for inline price data
        """
        self.secret_key = secret_key
        self.base_price_id = base_price_id
        self.add_on_price_id = add_on_price_id
        self.currency = currency

    @property
    def configured(self) -> bool:
        return bool(self.secret_key)

    def _line_item(self, price_id: Optional[str], name: str, unit_amount: int, quantity: int) -> Dict:
        if price_id:
            return {'price': price_id, 'quantity': quantity}
        return {
            'price_data': {
                'currency': self.currency,
                'product_data': {'name': name},
                'unit_amount': unit_amount,
            },
            'quantity': quantity,
        }

    def build_line_items(self, config: ProductConfiguration, product: Product) -> List[Dict]:
        """
        Translate a configuration into Stripe line items

        Args:
            config: Snapshot of the selection
            product: Catalog product for the snapshot

        Returns:
            One base line item, plus one add-on line item when selected
        """
        items = [self._line_item(self.base_price_id, product.name, product.unit_price, config.quantity)]
        if config.add_on_selected and product.add_on is not None:
            items.append(self._line_item(
                self.add_on_price_id,
                f'{product.name} · {product.add_on.name}',
                product.add_on.unit_price,
                config.add_on_quantity,
            ))
        return items

    def create_session(self, config: ProductConfiguration, origin: str) -> str:
        """
        Create a hosted checkout session

        Args:
            config: Snapshot of the selection
            origin: Site origin used for the success/cancel redirect URLs

        Returns:
            URL of the hosted payment page

        Raises:
            CheckoutNotConfiguredError: if no Stripe key is set
            CheckoutProviderError: if Stripe fails or returns no URL
        """
        if not self.configured:
            raise CheckoutNotConfiguredError()

        product = get_product(config.product_id)
        origin = origin.rstrip('/')

        try:
            session = stripe.checkout.Session.create(
                api_key=self.secret_key,
                mode='payment',
                line_items=self.build_line_items(config, product),
                success_url=f'{origin}/success',
                cancel_url=f'{origin}/cancel',
                metadata={
                    'product_id': product.id,
                    'quantity': str(config.quantity),
                    'add_on_selected': str(config.add_on_selected).lower(),
                    'add_on_quantity': str(config.effective_add_on_quantity),
                },
            )
        except stripe.StripeError as e:
            logger.error(f'Stripe checkout session failed: {e}')
            raise CheckoutProviderError() from e

        url = getattr(session, 'url', None)
        if not url:
            logger.error(f'Stripe session {getattr(session, "id", "?")} has no url')
            raise CheckoutProviderError()

        logger.info(f'Created checkout session {getattr(session, "id", "?")} for {product.id} x{config.quantity}')
        return url
