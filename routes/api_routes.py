"""
API Routes for the Storefront

JSON endpoints for checkout sessions, contact delivery and price quotes.
"""
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from extensions import limiter
from models import CheckoutRequest, ContactMessage
from services import get_product, quote_for
from services.errors import MailDeliveryError, StorefrontError, UnknownProductError
from utils import json_body, json_error, parse_bool, resolve_origin

api_bp = Blueprint('api', __name__)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return 'Invalid request'
    err = errors[0]
    field = '.'.join(str(part) for part in err.get('loc', ()))
    message = err.get('msg', 'Invalid value')
    return f'{field}: {message}' if field else message


@api_bp.route('/health')
def health():
    return jsonify({'status': 'ok'})


@api_bp.route('/checkout', methods=['POST'])
@limiter.limit('10 per minute')
@json_body
def create_checkout(payload):
    """Create a hosted checkout session for the posted configuration"""
    try:
        checkout_request = CheckoutRequest.model_validate(payload)
        product = get_product(checkout_request.product_id)
        config = checkout_request.to_configuration(product.id)

        url = current_app.checkout_service.create_session(config, resolve_origin())
        return jsonify({'url': url})
    except ValidationError as e:
        return json_error(_first_error(e), 400)
    except UnknownProductError as e:
        current_app.logger.warning(f'Checkout for unknown product: {e.product_id}')
        return json_error(e.public_message, 400)
    except StorefrontError as e:
        current_app.logger.error(f'[CHECKOUT_API_ERROR] {e}')
        return json_error(e.message, e.status_code)
    except Exception as e:
        current_app.logger.error(f'[CHECKOUT_API_ERROR] {e}', exc_info=True)
        return json_error('Failed to create checkout session.', 500)


@api_bp.route('/contact', methods=['POST'])
@limiter.limit('10 per minute')
@json_body
def contact(payload):
    """Deliver a contact form message"""
    try:
        message = ContactMessage.model_validate(payload)
    except ValidationError as e:
        return json_error(ContactMessage.describe_error(e), 400)

    try:
        current_app.mail_service.send(message)
        return jsonify({'message': 'Message sent.'})
    except MailDeliveryError as e:
        return json_error(e.message, 500)
    except Exception as e:
        current_app.logger.error(f'Error in contact: {e}', exc_info=True)
        return json_error('Failed to send message.', 500)


@api_bp.route('/quote')
def price_quote():
    """Price a configuration given as query parameters"""
    try:
        checkout_request = CheckoutRequest.model_validate({
            'productId': request.args.get('productId'),
            'quantity': request.args.get('quantity', 1, type=int),
            'addOnSelected': parse_bool(request.args.get('addOnSelected')),
            'addOnQuantity': request.args.get('addOnQuantity', 0, type=int),
        })
        product = get_product(checkout_request.product_id)
    except ValidationError as e:
        return json_error(_first_error(e), 400)
    except UnknownProductError as e:
        return json_error(e.public_message, 400)

    quote = quote_for(checkout_request.to_configuration(product.id), product)
    return jsonify({'productId': product.id, **quote.to_dict()})
