"""Clients package initialization"""
from .checkout_client import (
    CheckoutClient,
    CheckoutSucceeded,
    CheckoutFailed,
    SubmissionState,
)
from .contact_client import ContactClient, ContactSent, ContactFailed, build_mailto_link

__all__ = [
    'CheckoutClient',
    'CheckoutSucceeded',
    'CheckoutFailed',
    'SubmissionState',
    'ContactClient',
    'ContactSent',
    'ContactFailed',
    'build_mailto_link',
]
