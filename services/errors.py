"""
Storefront Errors

Exceptions raised by the services and translated to JSON errors by the routes.
"""


class StorefrontError(Exception):
    """Base class for storefront service errors"""
    status_code = 500
    public_message = 'Internal server error'

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class UnknownProductError(StorefrontError):
    """Product id is not in the catalog"""
    status_code = 400
    public_message = 'Unknown product.'

    def __init__(self, product_id: str):
        super().__init__(f'Unknown product: {product_id}')
        self.product_id = product_id


class CheckoutNotConfiguredError(StorefrontError):
    """Payment provider credentials are missing"""
    public_message = 'Stripe is not configured. Set STRIPE_SECRET_KEY.'


class CheckoutProviderError(StorefrontError):
    """Payment provider failed or returned no hosted checkout URL"""
    public_message = 'Failed to create checkout session.'


class MailDeliveryError(StorefrontError):
    """SMTP transport failed to deliver a contact message"""
    public_message = 'Failed to send message.'
