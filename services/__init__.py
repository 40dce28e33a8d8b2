"""Services package initialization"""
from .catalog import PRODUCTS, DEFAULT_PRODUCT_ID, Product, AddOn, get_product
from .pricing import ProductConfiguration, PriceQuote, compute_total, quote_for, format_krw
from .configurator import OrderConfigurator, MIN_QUANTITY, MAX_QUANTITY
from .checkout_service import CheckoutService
from .mail_service import MailService
from .errors import (
    StorefrontError,
    UnknownProductError,
    CheckoutNotConfiguredError,
    CheckoutProviderError,
    MailDeliveryError,
)

__all__ = [
    'PRODUCTS',
    'DEFAULT_PRODUCT_ID',
    'Product',
    'AddOn',
    'get_product',
    'ProductConfiguration',
    'PriceQuote',
    'compute_total',
    'quote_for',
    'format_krw',
    'OrderConfigurator',
    'MIN_QUANTITY',
    'MAX_QUANTITY',
    'CheckoutService',
    'MailService',
    'StorefrontError',
    'UnknownProductError',
    'CheckoutNotConfiguredError',
    'CheckoutProviderError',
    'MailDeliveryError',
]
