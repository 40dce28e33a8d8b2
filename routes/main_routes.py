"""
Main Routes for the Storefront

Intro, storefront, product configurator and payment redirect pages.
"""
from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, session, url_for
from pydantic import ValidationError

from models import ContactMessage
from services import PRODUCTS, OrderConfigurator, get_product
from services.errors import StorefrontError, UnknownProductError
from utils import resolve_origin

main_bp = Blueprint('main', __name__)


def _session_key(product_id: str) -> str:
    return f'config:{product_id}'


def _load_product(product_id: str):
    try:
        return get_product(product_id)
    except UnknownProductError:
        abort(404)


def _load_configurator(product) -> OrderConfigurator:
    return OrderConfigurator.from_session(product, session.get(_session_key(product.id)))


@main_bp.route('/')
def intro():
    """Intro splash screen"""
    return render_template('intro.html')


@main_bp.route('/home')
def home():
    """Single-page storefront (about / shop / contact)"""
    return render_template('home.html', products=list(PRODUCTS.values()))


@main_bp.route('/products/<product_id>')
def product_page(product_id):
    """Product configuration and checkout page"""
    product = _load_product(product_id)
    configurator = _load_configurator(product)
    return render_template('product.html', product=product, configurator=configurator)


@main_bp.route('/products/<product_id>/configure', methods=['POST'])
def configure(product_id):
    """Apply one configurator action, then redirect back to the product page"""
    product = _load_product(product_id)
    configurator = _load_configurator(product)

    try:
        configurator.apply(request.form.get('action', ''))
    except ValueError as e:
        current_app.logger.warning(f'Rejected configurator action: {e}')
        abort(400)

    session[_session_key(product.id)] = configurator.to_session()
    return redirect(url_for('main.product_page', product_id=product.id))


@main_bp.route('/products/<product_id>/checkout', methods=['POST'])
def checkout(product_id):
    """Snapshot the configuration and send the browser to the hosted payment page"""
    product = _load_product(product_id)
    snapshot = _load_configurator(product).snapshot()

    try:
        url = current_app.checkout_service.create_session(snapshot, resolve_origin())
    except StorefrontError as e:
        current_app.logger.error(f'Checkout failed for {product.id}: {e}')
        flash(e.message, 'error')
        return redirect(url_for('main.product_page', product_id=product.id))
    except Exception as e:
        current_app.logger.error(f'Checkout failed for {product.id}: {e}', exc_info=True)
        flash('Checkout failed.', 'error')
        return redirect(url_for('main.product_page', product_id=product.id))

    return redirect(url, code=303)


@main_bp.route('/contact', methods=['POST'])
def contact_form():
    """Contact form submitted without JavaScript"""
    try:
        message = ContactMessage.model_validate(request.form.to_dict())
    except ValidationError as e:
        flash(ContactMessage.describe_error(e), 'error')
        return redirect(url_for('main.home', _anchor='contact'))

    try:
        current_app.mail_service.send(message)
        flash('Message sent.', 'info')
    except StorefrontError as e:
        flash(e.message, 'error')

    return redirect(url_for('main.home', _anchor='contact'))


@main_bp.route('/success')
def success():
    """Hosted checkout completed"""
    return render_template('success.html')


@main_bp.route('/cancel')
def cancel():
    """Hosted checkout abandoned"""
    return render_template('cancel.html')
