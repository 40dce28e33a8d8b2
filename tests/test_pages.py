import re
from unittest import mock

import pytest
import stripe


@pytest.mark.parametrize('path', ['/', '/home', '/products/verume', '/success', '/cancel'])
def test_pages_render(client, path):
    response = client.get(path)
    assert response.status_code == 200


def test_unknown_product_page(client):
    assert client.get('/products/chair').status_code == 404


def test_product_page_shows_default_total(client):
    html = client.get('/products/verume').get_data(as_text=True)
    assert 'verumé' in html
    assert '₩ 248,000' in html


def test_configure_actions_update_session_and_total(client):
    for action in ['inc_qty', 'toggle_add_on', 'inc_add_on', 'inc_add_on']:
        response = client.post('/products/verume/configure', data={'action': action})
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/products/verume')

    with client.session_transaction() as sess:
        assert sess['config:verume'] == {'quantity': 2, 'add_on_selected': True, 'add_on_quantity': 3}

    html = client.get('/products/verume').get_data(as_text=True)
    assert '₩ 583,000' in html


def test_configure_clamps_at_lower_bound(client):
    for _ in range(5):
        client.post('/products/verume/configure', data={'action': 'dec_qty'})

    with client.session_transaction() as sess:
        assert sess['config:verume']['quantity'] == 1


def test_configure_rejects_unknown_action(client):
    response = client.post('/products/verume/configure', data={'action': 'free_items'})
    assert response.status_code == 400


def test_checkout_redirects_to_hosted_page(client, stripe_session):
    client.post('/products/verume/configure', data={'action': 'inc_qty'})

    with mock.patch('stripe.checkout.Session.create', return_value=stripe_session) as create:
        response = client.post('/products/verume/checkout')

    assert response.status_code == 303
    assert response.headers['Location'] == 'https://pay.example/sess_123'
    assert create.call_args.kwargs['line_items'][0]['quantity'] == 2


def test_checkout_failure_stays_on_product_page(client):
    with mock.patch('stripe.checkout.Session.create', side_effect=stripe.StripeError('down')):
        response = client.post('/products/verume/checkout', follow_redirects=True)

    assert response.status_code == 200
    html = response.get_data(as_text=True)
    assert 'Failed to create checkout session.' in html
    assert 'Pay now' in html


def test_contact_form_requires_fields(client):
    response = client.post('/contact', data={'name': 'Mina', 'email': '', 'message': 'Hi'}, follow_redirects=True)
    assert 'All fields are required.' in response.get_data(as_text=True)


def test_contact_form_sends(client):
    response = client.post('/contact', data={
        'name': 'Mina',
        'email': 'mina@example.com',
        'message': 'Hello',
    }, follow_redirects=True)
    assert 'Message sent.' in response.get_data(as_text=True)


def test_contact_form_too_long_field(client):
    response = client.post('/contact', data={'name': 'Mina', 'email': 'mina@example.com', 'message': 'x' * 5001},
                           follow_redirects=True)
    assert 'message is too long (max 5000 characters).' in response.get_data(as_text=True)


@pytest.mark.parametrize('path', ['/', '/home', '/products/verume'])
def test_static_assets_exist(client, path):
    html = client.get(path).get_data(as_text=True)
    assets = set(re.findall(r'(?:src|href)="(/static/[^"]+)"', html))

    assert assets
    for asset in assets:
        response = client.get(asset)
        assert response.status_code == 200, asset
        response.close()
